from swissmeta.util import WIN, LOSS, DRAW

A = 'A'
B = 'B'
DRAWN = 'D'
BYE = 'BYE'
RESULTS = (A, B, DRAWN, BYE)

class Match(object):
    """A pairing at one table of a Round. Side b is absent for a bye;
    result is absent while the match is pending."""

    def __init__(self, mid, table, a, b=None, result=None):
        self.mid = mid
        self.table = table
        self.a = a
        self.b = b
        self.result = result

    @staticmethod
    def fromDict(data):
        return Match(data['mid'], data.get('table', 0), data['a'],
                data.get('b') or None, data.get('result') or None)

    def toDict(self):
        data = { 'mid': self.mid, 'table': self.table, 'a': self.a }
        if self.b is not None:
            data['b'] = self.b
        if self.result is not None:
            data['result'] = self.result
        return data

    def isBye(self):
        return self.result == BYE

    def isPending(self):
        return self.result is None

    def isContest(self):
        """True for a resolved two-player match (not pending, not a bye)."""
        return self.b is not None and self.result in (A, B, DRAWN)

    def getOutcomes(self):
        """Resolve the stored result into per-player outcomes.

        Returns a list of (pid, outcome) pairs: one pair for a bye, two for
        a resolved contest, none for a pending or unresolvable match."""
        if self.result == BYE:
            return [(self.a, WIN)]
        if not self.isContest():
            return []
        if self.result == A:
            return [(self.a, WIN), (self.b, LOSS)]
        elif self.result == B:
            return [(self.a, LOSS), (self.b, WIN)]
        return [(self.a, DRAW), (self.b, DRAW)]

    def __repr__(self):
        return '<Match({0} table {1}: {2} vs. {3} -> {4})>'.format(self.mid,
            self.table, self.a, self.b or 'BYE', self.result or 'pending')

def getDeckOutcomes(match, entryMap):
    """Resolve a match at the deck level.

    match: A Match.
    entryMap: Dictionary mapping pid to did for one tournament.

    Returns (didA, outcomeA, didB, outcomeB), or None when the match does
    not count toward deck statistics: byes, pending matches, and matches
    where either player has no deck entry."""
    outcomes = match.getOutcomes()
    if len(outcomes) != 2:
        return None
    (pidA, outA), (pidB, outB) = outcomes
    didA = entryMap.get(pidA)
    didB = entryMap.get(pidB)
    if not didA or not didB:
        return None
    return (didA, outA, didB, outB)
