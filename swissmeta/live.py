"""Live result entry for the tournament currently being played.

A LiveTournament owns one Tournament record and edits it round by round:
add players, assign decks, open a round, add pairings, record results and
close the round. Every successful edit is saved through the store. Pairing
players is left to the organizer.
"""

import random
import string
from datetime import date

from swissmeta.config import config, getLogger, defaultRules
from swissmeta.match import Match, RESULTS, BYE
from swissmeta.stats import getStandings, getDeckStats, getDeckMatchups
from swissmeta.tournament import (SwissMetaError, Tournament, Player, Deck,
        Entry, Round, Rules, dumpTournamentFile)

logger = getLogger(__name__)

class LiveError(SwissMetaError):
    """An edit was refused; the tournament is unchanged."""

class RoundLockedError(LiveError):
    pass

class RoundIncompleteError(LiveError):
    pass

def uid(prefix='id'):
    chars = string.ascii_lowercase + string.digits
    return '{0}_{1}'.format(prefix, ''.join(random.choice(chars) for i in range(8)))

def makeTournament(name=None, when=None, rounds=None, rules=None):
    """Create an empty tournament dated today unless a date is given."""
    when = when or date.today().strftime('%Y-%m-%d')
    name = name or config.get('tournament', 'name', fallback='Weekly Swiss')
    if rounds is None:
        rounds = config.getint('tournament', 'rounds', fallback=4)
    if rules is None:
        rules = Rules(**defaultRules())
    tid = '{0}_weekly_{1}'.format(when, uid('t')[-4:])
    return Tournament(tid, name, when, rounds=rounds, rules=rules, location='',
            notes='')

class LiveTournament(object):
    def __init__(self, store=None, tournament=None):
        """store: Object with load(), save(t) and clear(), or None to keep
              the tournament in memory only.
        tournament: Tournament to edit. If omitted, the stored one is
              loaded, or a new one is created."""
        self.store = store
        if tournament is None and store is not None:
            tournament = store.load()
        self.tournament = tournament or makeTournament()

    def save(self):
        if self.store is not None:
            self.store.save(self.tournament)

    def newTournament(self, name=None, when=None, rounds=None, rules=None):
        self.tournament = makeTournament(name, when, rounds, rules)
        self.save()
        logger.info('Started %s', self.tournament)
        return self.tournament

    def reset(self):
        """Discard the stored tournament and start an empty one."""
        if self.store is not None:
            self.store.clear()
        self.tournament = makeTournament()
        return self.tournament

    def requirePlayer(self, pid):
        if self.tournament.getPlayer(pid) is None:
            raise LiveError('Unknown player: {0}'.format(pid))

    # Roster

    def addPlayer(self, name):
        """Add a player by name. Blank names are ignored (returns None)."""
        name = name.strip()
        if not name:
            return None
        player = Player(uid('p'), name)
        self.tournament.players.append(player)
        self.save()
        return player

    def setEntry(self, pid, did, deckName=None):
        """Assign a deck to a player, replacing any previous entry. An empty
        did removes the entry. The tournament's deck list is kept to the
        decks that have entries."""
        self.requirePlayer(pid)
        t = self.tournament
        names = t.getDeckNames()
        if did and deckName:
            names[did] = deckName
        t.entries = [ e for e in t.entries if e.pid != pid ]
        if did:
            t.entries.append(Entry(pid, did))
        used = []
        for e in t.entries:
            if e.did not in used:
                used.append(e.did)
        t.decks = [ Deck(d, names.get(d, d)) for d in used ]
        self.save()

    # Rounds

    def startRound(self):
        """Open the next round. The current round must be locked first, and
        no more rounds than the format allows can be opened."""
        t = self.tournament
        current = t.getCurrentRound()
        if current is not None and not current.locked:
            raise RoundIncompleteError('Round {0} is still open'.format(current.r))
        if t.numRounds and len(t.rounds) >= t.numRounds:
            raise LiveError('All {0} rounds have been played'.format(t.numRounds))
        rd = Round(len(t.rounds) + 1)
        t.rounds.append(rd)
        self.save()
        return rd

    def addMatch(self, a, b=None):
        """Pair two players at the next table of the current round. Without
        an opponent the match is a bye, already resolved."""
        current = self.tournament.getCurrentRound()
        if current is None:
            raise LiveError('No round has been started')
        if current.locked:
            raise RoundLockedError('Round {0} is locked'.format(current.r))
        self.requirePlayer(a)
        if b is not None:
            self.requirePlayer(b)
            if a == b:
                raise LiveError('A player cannot be paired against themselves')
        match = Match(uid('m'), len(current.matches) + 1, a, b,
                None if b else BYE)
        current.matches.append(match)
        self.save()
        return match

    def getRound(self, r):
        for rd in self.tournament.rounds:
            if rd.r == r:
                return rd
        raise LiveError('No round {0}'.format(r))

    def setResult(self, r, mid, result):
        """Record the result of a match in an unlocked round."""
        if result not in RESULTS:
            raise LiveError("Unknown result '{0}', expected one of {1}".format(
                result, ', '.join(RESULTS)))
        rd = self.getRound(r)
        if rd.locked:
            logger.warning('Refused result for %s: round %d is locked', mid, r)
            raise RoundLockedError('Round {0} is locked'.format(r))
        match = rd.getMatch(mid)
        if match is None:
            raise LiveError('No match {0} in round {1}'.format(mid, r))
        if (result == BYE) != (match.b is None):
            raise LiveError('Match {0}: a bye is only possible without an opponent'
                    .format(mid))
        match.result = result
        self.save()
        return match

    def closeRound(self):
        """Lock the current round once every two-player match has a result."""
        current = self.tournament.getCurrentRound()
        if current is None:
            raise LiveError('No round has been started')
        if current.locked:
            return current
        if not current.isComplete():
            raise RoundIncompleteError('Round {0} has matches without a result'
                    .format(current.r))
        current.locked = True
        self.save()
        logger.info('Closed round %d of %s', current.r, self.tournament)
        return current

    # Views

    def standings(self):
        return getStandings(self.tournament)

    def deckStats(self):
        return getDeckStats(self.tournament)

    def matchups(self):
        return getDeckMatchups(self.tournament)

    def export(self, path=None):
        """Write the tournament to a JSON file, by default <id>.json."""
        path = path or '{0}.json'.format(self.tournament.id)
        dumpTournamentFile(self.tournament, path)
        logger.info('Exported %s to %s', self.tournament, path)
        return path
