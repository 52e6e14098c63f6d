"""Deck Lab: how one selected deck performs against the rest of the field.

Win rates here are draw-inclusive, (w + d/2) / matches, so that a deck's
rows can be compared as expected scores. Everything is recomputed from the
tournaments passed in on every call.
"""

from swissmeta.match import getDeckOutcomes
from swissmeta.util import WIN, LOSS, DRAW, record, scoreRate, groupByMonth

MIN_BEST_WORST = 3  # Matches required before an opponent can be best/worst
BEST_WORST_SIZE = 3

class DeckRecord(object):
    """Draw-inclusive match record of the selected deck."""
    def __init__(self):
        self.matches = 0
        self.w = 0
        self.l = 0
        self.d = 0
        self.winRate = 0

    def apply(self, outcome):
        self.matches += 1
        if outcome == WIN:
            self.w += 1
        elif outcome == LOSS:
            self.l += 1
        else:
            self.d += 1

    def finish(self):
        self.winRate = scoreRate(self.w, self.l, self.d)
        return self

class DeckVsRow(DeckRecord):
    def __init__(self, opponentDid):
        DeckRecord.__init__(self)
        self.opponentDid = opponentDid

    def __repr__(self):
        return '<DeckVsRow(vs. {0}: {1}-{2}-{3})>'.format(self.opponentDid,
                self.w, self.l, self.d)

class DeckVsSummary(DeckRecord):
    def __init__(self, did):
        DeckRecord.__init__(self)
        self.did = did
        self.tournaments = 0

    def __repr__(self):
        return '<DeckVsSummary({0}: {1}-{2}-{3} in {4} tournaments)>'.format(
                self.did, self.w, self.l, self.d, self.tournaments)

class DeckVsField(object):
    def __init__(self, summary, rows):
        self.summary = summary
        self.rows = rows

class TrendPoint(DeckRecord):
    def __init__(self, month):
        DeckRecord.__init__(self)
        self.month = month

    def __repr__(self):
        return '<TrendPoint({0}: {1}-{2}-{3})>'.format(self.month, self.w,
                self.l, self.d)

def getContests(t, did):
    """Generate (opponentDid, outcome) for every contest the deck played
    in one tournament, outcome from the selected deck's point of view.

    A decisive mirror match is a win, since the deck is the winning side
    either way."""
    entryMap = t.getEntryMap()
    for m in t:
        resolved = getDeckOutcomes(m, entryMap)
        if resolved is None:
            continue
        didA, outA, didB, outB = resolved
        if didA == did and didB == did:
            yield did, (DRAW if outA == DRAW else WIN)
        elif didA == did:
            yield didB, outA
        elif didB == did:
            yield didA, outB

def getDeckVsField(tournaments, did):
    """Aggregate the selected deck's record against each opponent deck.

    Returns a DeckVsField whose rows are ordered by matches played
    (descending) and whose summary collapses every row; the summary counts
    the tournaments where the deck played at least one match."""
    rows = {}
    summary = DeckVsSummary(did)
    for t in tournaments:
        played = False
        for opponent, outcome in getContests(t, did):
            if opponent not in rows:
                rows[opponent] = DeckVsRow(opponent)
            rows[opponent].apply(outcome)
            summary.apply(outcome)
            played = True
        if played:
            summary.tournaments += 1
    result = [ row.finish() for row in rows.values() ]
    result.sort(key=lambda r: -r.matches)
    return DeckVsField(summary.finish(), result)

def filterRows(rows, minSample):
    return [ r for r in rows if r.matches >= minSample ]

def sortRows(rows, by='matches'):
    """Order versus-field rows by 'matches' or 'winrate', descending."""
    if by == 'winrate':
        return sorted(rows, key=lambda r: -r.winRate)
    return sorted(rows, key=lambda r: -r.matches)

def getBestWorst(rows, minSample=0):
    """Best and worst opponents among rows with enough matches.

    Only rows with at least max(3, minSample) matches qualify. Returns
    (best, worst): the three highest win rates, best first, and the three
    lowest, worst first."""
    eligible = filterRows(rows, max(MIN_BEST_WORST, minSample))
    byRate = sortRows(eligible, 'winrate')
    best = byRate[:BEST_WORST_SIZE]
    worst = byRate[-BEST_WORST_SIZE:]
    worst.reverse()
    return best, worst

def getDeckTrendByMonth(tournaments, did, opponentDid=None):
    """Monthly record of the selected deck, optionally only against one
    opponent. Months with no matches are left out; points are in
    chronological order."""
    points = []
    for month, group in groupByMonth(tournaments):
        outcomes = [ outcome for t in group for opponent, outcome in getContests(t, did)
                if not opponentDid or opponent == opponentDid ]
        if not outcomes:
            continue
        point = TrendPoint(month)
        point.matches = len(outcomes)
        point.w, point.l, point.d = record(outcomes)
        points.append(point.finish())
    return points
