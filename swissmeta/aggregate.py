"""Fold many tournaments into global player and deck leaderboards."""

from swissmeta.match import getDeckOutcomes
from swissmeta.stats import metaOrder
from swissmeta.util import WIN, LOSS, winRate, ratio

OTHERS = 'Others'

class PlayerAgg(object):
    def __init__(self, pid, name):
        self.pid = pid
        self.name = name
        self.tournaments = 0
        self.matches = 0
        self.w = 0
        self.l = 0
        self.d = 0
        self.points = 0
        self.winRate = 0

    def apply(self, outcome, rules):
        self.matches += 1
        if outcome == WIN:
            self.w += 1
        elif outcome == LOSS:
            self.l += 1
        else:
            self.d += 1
        self.points += rules.getPoints(outcome)

    def __repr__(self):
        return '<PlayerAgg({0}: {1} pts in {2} tournaments)>'.format(self.name,
                self.points, self.tournaments)

class DeckAgg(object):
    def __init__(self, did, deckName):
        self.did = did
        self.deckName = deckName
        self.entries = 0
        self.metaShare = 0
        self.matches = 0
        self.w = 0
        self.l = 0
        self.d = 0
        self.winRate = 0

    @property
    def dominance(self):
        """Popular and strong: meta share times win rate."""
        return self.metaShare * self.winRate

    def apply(self, outcome):
        self.matches += 1
        if outcome == WIN:
            self.w += 1
        elif outcome == LOSS:
            self.l += 1
        else:
            self.d += 1

    def __repr__(self):
        return '<DeckAgg({0}: {1} entries, {2}-{3}-{4})>'.format(self.did,
                self.entries, self.w, self.l, self.d)

class Aggregate(object):
    def __init__(self, players, decks, totalEntries):
        self.players = players
        self.decks = decks
        self.totalEntries = totalEntries

class MetaSlice(object):
    """One slice of a meta-share breakdown; did is None for the
    remainder slice."""
    def __init__(self, did, name, share):
        self.did = did
        self.name = name
        self.share = share

    def __repr__(self):
        return '<MetaSlice({0}: {1:.3f})>'.format(self.name, self.share)

def aggregatePlayersAndDecks(tournaments):
    """Aggregate player and deck results over a list of Tournaments.

    Every tournament keeps its own point rules. A player or deck keeps the
    name it was first seen with. Deck meta share is relative to the total
    number of deck entries over all the tournaments.

    Returns an Aggregate holding the sorted players and decks and the
    total number of entries."""
    players = {}
    decks = {}
    totalEntries = 0
    for t in tournaments:
        entryMap = t.getEntryMap()
        names = t.getDeckNames()
        rules = t.rules
        for p in t.players:
            did = entryMap.get(p.pid)
            if not did:
                continue
            totalEntries += 1
            if did not in decks:
                decks[did] = DeckAgg(did, names.get(did, did))
            decks[did].entries += 1
        for p in t.players:
            if p.pid not in players:
                players[p.pid] = PlayerAgg(p.pid, p.name)
            players[p.pid].tournaments += 1
        for m in t:
            outcomes = m.getOutcomes()
            if len(outcomes) == 2 and any(( pid not in players for pid, o in outcomes )):
                continue
            for pid, outcome in outcomes:
                if pid in players:
                    players[pid].apply(outcome, rules)
            resolved = getDeckOutcomes(m, entryMap)
            if resolved is None:
                continue
            didA, outA, didB, outB = resolved
            if didA not in decks or didB not in decks:
                continue
            decks[didA].apply(outA)
            decks[didB].apply(outB)
    playerList = list(players.values())
    for p in playerList:
        p.winRate = winRate(p.w, p.l, p.d)
    playerList.sort(key=lambda p: (-p.points, -p.winRate, -p.matches))
    deckList = list(decks.values())
    for d in deckList:
        d.metaShare = ratio(d.entries, totalEntries)
        d.winRate = winRate(d.w, d.l, d.d)
    deckList.sort(key=metaOrder)
    return Aggregate(playerList, deckList, totalEntries)

def getDecksByMeta(agg):
    return sorted(agg.decks, key=lambda d: -d.metaShare)

def getDecksByWinRate(agg, minSample=6):
    """Decks with at least minSample matches, best win rate first."""
    return sorted([ d for d in agg.decks if d.matches >= minSample ],
            key=lambda d: -d.winRate)

def getDecksByDominance(agg, minSample=6):
    """Decks with at least minSample matches, highest dominance first."""
    return sorted([ d for d in agg.decks if d.matches >= minSample ],
            key=lambda d: -d.dominance)

def getMetaSlices(decks, top=8):
    """Split decks (already ordered by meta share) into the top few slices
    plus one remainder slice, omitted when the remainder is empty."""
    slices = [ MetaSlice(d.did, d.deckName, d.metaShare) for d in decks[:top] ]
    rest = sum(( d.metaShare for d in decks[top:] ))
    if rest > 0:
        slices.append(MetaSlice(None, OTHERS, rest))
    return slices
