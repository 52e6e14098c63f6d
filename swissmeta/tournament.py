import json

from dateutil.parser import parse

from swissmeta.match import Match, RESULTS
from swissmeta.util import getMonth, WIN, LOSS

class SwissMetaError(Exception):
    """Base class for errors raised outside the statistics functions."""

class TournamentError(SwissMetaError):
    """A tournament record could not be read or written."""

class Player(object):
    def __init__(self, pid, name):
        self.pid = pid
        self.name = name

    def __repr__(self):
        return '<Player({0}: {1})>'.format(self.pid, self.name)

class Deck(object):
    """A deck catalog entry as recorded in one tournament, so that an
    exported tournament file names its own decks."""
    def __init__(self, did, name):
        self.did = did
        self.name = name

    def __repr__(self):
        return '<Deck({0}: {1})>'.format(self.did, self.name)

class Entry(object):
    """The deck a player piloted in a tournament."""
    def __init__(self, pid, did):
        self.pid = pid
        self.did = did

class Rules(object):
    def __init__(self, winPoints=3, drawPoints=1, lossPoints=0):
        self.winPoints = winPoints
        self.drawPoints = drawPoints
        self.lossPoints = lossPoints

    def getPoints(self, outcome):
        """Points awarded for a win, loss or draw outcome."""
        if outcome == WIN:
            return self.winPoints
        elif outcome == LOSS:
            return self.lossPoints
        return self.drawPoints

class Round(object):
    def __init__(self, r, matches=None, locked=False):
        self.r = r
        self.matches = matches if matches is not None else []
        self.locked = locked

    def __iter__(self):
        return iter(self.matches)

    def getMatch(self, mid):
        for m in self.matches:
            if m.mid == mid:
                return m
        return None

    def isComplete(self):
        """True when every two-sided match has a result."""
        return all(( m.result is not None for m in self.matches if m.b is not None ))

class Tournament(object):
    """Represents a Swiss tournament.

    File model:

    tournament = {
        id: "2026-02-03_weekly_x1y2",
        name: "Weekly",
        date: "2026-02-03",
        location: "Somewhere",
        format: {
            type: "swiss",
            rounds: 4,
            rules: { winPoints: 3, drawPoints: 1, lossPoints: 0 }
        },
        players: [ { pid: "p1", name: "Alice" }, ... ],
        decks: [ { did: "suisei", name: "Suisei" }, ... ],
        entries: [ { pid: "p1", did: "suisei" }, ... ],
        rounds: [
            {
                r: 1,
                locked: true,
                matches: [ { mid: "m1", table: 1, a: "p1", b: "p2", result: "A" },
                           { mid: "m2", table: 2, a: "p3", result: "BYE" } ]
            },
            ...
        ],
        notes: ""
    }
    """

    def __init__(self, tid, name, date, rounds=4, rules=None, location=None,
            notes=None, formatType='swiss'):
        """Instantiate a Tournament with an empty roster."""
        self.id = tid
        self.name = name
        self.date = date
        self.location = location
        self.notes = notes
        self.formatType = formatType
        self.numRounds = rounds
        self.rules = rules if rules is not None else Rules()
        self.players = []
        self.decks = []
        self.entries = []
        self.rounds = []

    def __iter__(self):
        """Iterate over every match, round by round."""
        for rd in self.rounds:
            for m in rd.matches:
                yield m

    def __repr__(self):
        return "<Tournament({0}, {1}: {2} players>".format(self.name,
                self.date, len(self.players))

    @staticmethod
    def fromDict(data):
        """Build a Tournament from the JSON file model. Optional fields may
        be missing; required fields are assumed to be well-typed."""
        try:
            fmt = data.get('format') or {}
            r = fmt.get('rules') or {}
            rules = Rules(r.get('winPoints', 3), r.get('drawPoints', 1),
                    r.get('lossPoints', 0))
            t = Tournament(data['id'], data.get('name', data['id']),
                    normalizeDate(data['date']), rounds=fmt.get('rounds', 0),
                    rules=rules, location=data.get('location'),
                    notes=data.get('notes'), formatType=fmt.get('type', 'swiss'))
            t.players = [ Player(p['pid'], p.get('name', p['pid']))
                    for p in data.get('players') or [] ]
            t.decks = [ Deck(d['did'], d.get('name', d['did']))
                    for d in data.get('decks') or [] ]
            t.entries = [ Entry(e['pid'], e['did'])
                    for e in data.get('entries') or [] ]
            for rd in data.get('rounds') or []:
                matches = [ Match.fromDict(m) for m in rd.get('matches') or [] ]
                t.rounds.append(Round(rd['r'], matches, rd.get('locked', False)))
        except KeyError as e:
            raise TournamentError("Tournament record is missing field {0}".format(e))
        for m in t:
            if m.result is not None and m.result not in RESULTS:
                raise TournamentError("{0}: unknown result code '{1}' in match {2}"
                        .format(t.id, m.result, m.mid))
        return t

    def toDict(self):
        data = {
            'id': self.id,
            'name': self.name,
            'date': self.date,
            'format': {
                'type': self.formatType,
                'rounds': self.numRounds,
                'rules': {
                    'winPoints': self.rules.winPoints,
                    'drawPoints': self.rules.drawPoints,
                    'lossPoints': self.rules.lossPoints
                }
            },
            'players': [ { 'pid': p.pid, 'name': p.name } for p in self.players ],
            'decks': [ { 'did': d.did, 'name': d.name } for d in self.decks ],
            'entries': [ { 'pid': e.pid, 'did': e.did } for e in self.entries ],
            'rounds': [ { 'r': rd.r, 'locked': rd.locked,
                'matches': [ m.toDict() for m in rd.matches ] } for rd in self.rounds ]
        }
        if self.location is not None:
            data['location'] = self.location
        if self.notes is not None:
            data['notes'] = self.notes
        return data

    def getEntryMap(self):
        """Dictionary mapping each pid to the did of its entry."""
        return { e.pid: e.did for e in self.entries }

    def getDeckNames(self):
        """Dictionary mapping each did to its display name."""
        return { d.did: d.name for d in self.decks }

    def getPlayer(self, pid):
        for p in self.players:
            if p.pid == pid:
                return p
        return None

    def getCurrentRound(self):
        if self.rounds:
            return self.rounds[-1]
        return None

    def getMonth(self):
        return getMonth(self.date)

    def getNumPlayers(self):
        return len(self.players)

def normalizeDate(value):
    """Normalize any parseable date string to YYYY-MM-DD."""
    try:
        return parse(str(value)).strftime('%Y-%m-%d')
    except (ValueError, OverflowError):
        raise TournamentError("Couldn't parse tournament date '{0}'".format(value))

def loadTournamentFile(path):
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise TournamentError('Error reading {0} (expects well-formed JSON): {1}'
                .format(path, e))
    return Tournament.fromDict(data)

def dumpTournamentFile(t, path):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(t.toDict(), f, indent=2, ensure_ascii=False)
        f.write('\n')
