"""Statistics for a single tournament: player standings, per-deck
performance and the deck-vs-deck matchup matrix.

Each function takes one Tournament and returns freshly built objects; the
tournament is never modified. Counts are accumulated first, keyed by id,
and rates are derived in a separate pass once every match has been seen.
"""

from swissmeta.match import getDeckOutcomes
from swissmeta.util import WIN, LOSS, DRAW, winRate, ratio

class PlayerStanding(object):
    def __init__(self, pid, name):
        self.pid = pid
        self.name = name
        self.w = 0
        self.l = 0
        self.d = 0
        self.points = 0
        self.played = 0

    def apply(self, outcome, rules):
        self.played += 1
        if outcome == WIN:
            self.w += 1
        elif outcome == LOSS:
            self.l += 1
        else:
            self.d += 1
        self.points += rules.getPoints(outcome)

    def __repr__(self):
        return '<PlayerStanding({0}: {1} pts, {2}-{3}-{4})>'.format(self.name,
                self.points, self.w, self.l, self.d)

class DeckTournamentStats(object):
    def __init__(self, did, deckName):
        self.did = did
        self.deckName = deckName
        self.players = 0
        self.metaShare = 0
        self.matches = 0
        self.wins = 0
        self.losses = 0
        self.draws = 0
        self.winRate = 0

    def apply(self, outcome):
        self.matches += 1
        if outcome == WIN:
            self.wins += 1
        elif outcome == LOSS:
            self.losses += 1
        else:
            self.draws += 1

    def __repr__(self):
        return '<DeckTournamentStats({0}: {1} players, {2}-{3}-{4})>'.format(
                self.did, self.players, self.wins, self.losses, self.draws)

class DeckVsDeckCell(object):
    """Head-to-head record between two decks; aDid sorts before bDid."""
    def __init__(self, aDid, bDid):
        self.aDid = aDid
        self.bDid = bDid
        self.matches = 0
        self.aWins = 0
        self.bWins = 0
        self.draws = 0
        self.aWinRate = 0

    def __repr__(self):
        return '<DeckVsDeckCell({0} vs. {1}: {2}-{3}-{4})>'.format(self.aDid,
                self.bDid, self.aWins, self.bWins, self.draws)

def metaOrder(s):
    """Sort key for the meta relevance ranking: meta share, then win rate,
    then matches played, all descending."""
    return (-s.metaShare, -s.winRate, -s.matches)

def pairKey(did1, did2):
    """Direction-independent key for a pair of decks."""
    if did1 <= did2:
        return (did1, did2)
    return (did2, did1)

def getStandings(t):
    """Rank the players of a tournament.

    Points follow the tournament's own rules; a bye counts as a win and as
    a match played. Players are ordered by points, then wins (both
    descending), then name ignoring case."""
    rules = t.rules
    standings = {}
    for p in t.players:
        standings[p.pid] = PlayerStanding(p.pid, p.name)
    for m in t:
        for pid, outcome in m.getOutcomes():
            s = standings.get(pid)
            if s is not None:
                s.apply(outcome, rules)
    result = list(standings.values())
    result.sort(key=lambda s: (-s.points, -s.w, s.name.casefold(), s.name))
    return result

def getDeckStats(t):
    """Per-deck meta share and draw-exclusive win rate for one tournament.

    Byes, pending matches and matches involving a player without a deck
    entry do not count as deck matches."""
    entryMap = t.getEntryMap()
    names = t.getDeckNames()
    totalPlayers = len(t.players) or 1
    stats = {}
    def ensure(did):
        if did not in stats:
            stats[did] = DeckTournamentStats(did, names.get(did, did))
        return stats[did]
    for p in t.players:
        did = entryMap.get(p.pid)
        if did:
            ensure(did).players += 1
    for m in t:
        resolved = getDeckOutcomes(m, entryMap)
        if resolved is None:
            continue
        didA, outA, didB, outB = resolved
        ensure(didA).apply(outA)
        ensure(didB).apply(outB)
    for s in stats.values():
        s.metaShare = ratio(s.players, totalPlayers)
        s.winRate = winRate(s.wins, s.losses, s.draws)
    result = list(stats.values())
    result.sort(key=metaOrder)
    return result

def getDeckMatchups(t):
    """Build the deck-vs-deck matrix for one tournament: one cell per
    unordered pair of decks that met, most-played pairs first."""
    entryMap = t.getEntryMap()
    cells = {}
    for m in t:
        resolved = getDeckOutcomes(m, entryMap)
        if resolved is None:
            continue
        didA, outA, didB, outB = resolved
        key = pairKey(didA, didB)
        if key not in cells:
            cells[key] = DeckVsDeckCell(*key)
        cell = cells[key]
        cell.matches += 1
        if outA == DRAW:
            cell.draws += 1
        elif outA == WIN:
            # Side A's deck won.
            if cell.aDid == didA:
                cell.aWins += 1
            else:
                cell.bWins += 1
        else:
            if cell.aDid == didB:
                cell.aWins += 1
            else:
                cell.bWins += 1
    for cell in cells.values():
        cell.aWinRate = ratio(cell.aWins, cell.matches)
    result = list(cells.values())
    result.sort(key=lambda c: -c.matches)
    return result
