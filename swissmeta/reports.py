"""Build report Tables from the statistics.

Most functions take already computed statistics and an optional
DeckCatalog used to turn deck ids into display names."""

from swissmeta.table import Table, Field

# Helper functions

def deckLabel(catalog, did, fallback=None):
    if catalog is not None:
        return catalog.getLabel(did, fallback)
    return fallback or did

def recordFields(table, w='w', l='l', d='d'):
    table.addField(Field(w, 'W', type='int'))
    table.addField(Field(l, 'L', type='int'))
    table.addField(Field(d, 'D', type='int'))

# Single tournament

def standingsTable(standings, title=None):
    """Player standings, in ranked order."""
    table = Table(title)
    table.addField(Field('rank', '#', type='int'))
    table.addField(Field('name', 'Player'))
    table.addField(Field('points', 'Pts', type='int'))
    recordFields(table)
    table.addField(Field('played', 'Played', type='int'))
    for i, s in enumerate(standings):
        table.addRecord(i + 1, s.name, s.points, s.w, s.l, s.d, s.played)
    return table

def deckStatsTable(stats, catalog=None, minSample=None, title=None):
    """Deck meta share and win rate within one tournament. With minSample,
    win rates of decks with fewer matches are shown as an insufficient
    sample."""
    table = Table(title)
    table.addField(Field('deck', 'Deck'))
    table.addField(Field('players', '# in Field', type='int'))
    table.addField(Field('metaShare', '% of Field', type='percent'))
    table.addField(Field('matches', 'Matches', type='int'))
    recordFields(table, 'wins', 'losses', 'draws')
    table.addField(Field('winRate', 'Win %', type='percent', gate=minSample))
    for s in stats:
        table.addRecord(deckLabel(catalog, s.did, s.deckName), s.players,
                s.metaShare, s.matches, s.wins, s.losses, s.draws, s.winRate)
    return table

def matchupsTable(cells, catalog=None, names=None, title=None):
    """Deck-vs-deck cells, most played first.
    names: Optional dictionary of did to name from the tournament."""
    names = names or {}
    table = Table(title)
    table.addField(Field('deckA', 'Deck'))
    table.addField(Field('deckB', 'Opponent'))
    table.addField(Field('matches', 'Matches', type='int'))
    table.addField(Field('aWins', 'Wins', type='int'))
    table.addField(Field('bWins', 'Losses', type='int'))
    table.addField(Field('draws', 'Draws', type='int'))
    table.addField(Field('aWinRate', 'Win %', type='percent'))
    for c in cells:
        table.addRecord(deckLabel(catalog, c.aDid, names.get(c.aDid)),
                deckLabel(catalog, c.bDid, names.get(c.bDid)), c.matches,
                c.aWins, c.bWins, c.draws, c.aWinRate)
    return table

def pairingsTable(t, title=None):
    """Every match of a tournament, round by round."""
    def name(pid):
        p = t.getPlayer(pid)
        return p.name if p else pid
    table = Table(title)
    table.addField(Field('round', 'Round', type='int'))
    table.addField(Field('table', 'Table', type='int'))
    table.addField(Field('mid', 'Match'))
    table.addField(Field('a', 'Player A'))
    table.addField(Field('b', 'Player B'))
    table.addField(Field('result', 'Result'))
    table.addField(Field('locked', 'Locked'))
    for rd in t.rounds:
        for m in rd:
            table.addRecord(rd.r, m.table, m.mid, name(m.a),
                    name(m.b) if m.b else '-', m.result or 'pending',
                    'yes' if rd.locked else 'no')
    return table

# Archive

def playersTable(players, title=None):
    table = Table(title)
    table.addField(Field('name', 'Player'))
    table.addField(Field('tournaments', 'Events', type='int'))
    table.addField(Field('points', 'Pts', type='int'))
    table.addField(Field('matches', 'Matches', type='int'))
    recordFields(table)
    table.addField(Field('winRate', 'Win %', type='percent'))
    for p in players:
        table.addRecord(p.name, p.tournaments, p.points, p.matches, p.w, p.l,
                p.d, p.winRate)
    return table

def decksTable(decks, catalog=None, minSample=None, dominance=False, title=None):
    """Deck leaderboard over a set of tournaments.
    dominance: Add the meta share x win rate column."""
    table = Table(title)
    table.addField(Field('deck', 'Deck'))
    table.addField(Field('entries', 'Entries', type='int'))
    table.addField(Field('metaShare', '% of Field', type='percent'))
    table.addField(Field('matches', 'Matches', type='int'))
    recordFields(table)
    table.addField(Field('winRate', 'Win %', type='percent', gate=minSample))
    if dominance:
        table.addField(Field('dominance', 'Dominance', type='float',
            precision=4, gate=minSample))
    for d in decks:
        table.addRecord(deckLabel(catalog, d.did, d.deckName), d.entries,
                d.metaShare, d.matches, d.w, d.l, d.d, d.winRate, d.dominance)
    return table

# Deck Lab

def vsFieldTable(result, catalog=None, names=None, title=None):
    """Versus-field rows followed by an overall row.
    names: Optional dictionary of did to name for opponents."""
    names = names or {}
    table = Table(title)
    table.addField(Field('opponent', 'Opponent'))
    table.addField(Field('matches', 'Matches', type='int'))
    recordFields(table)
    table.addField(Field('winRate', 'Score %', type='percent'))
    for r in result.rows:
        table.addRecord(deckLabel(catalog, r.opponentDid, names.get(r.opponentDid)),
                r.matches, r.w, r.l, r.d, r.winRate)
    s = result.summary
    table.addRecord('Overall ({0} events)'.format(s.tournaments), s.matches,
            s.w, s.l, s.d, s.winRate)
    return table

def bestWorstTable(best, worst, catalog=None, names=None, title=None):
    names = names or {}
    table = Table(title)
    table.addField(Field('kind', ''))
    table.addField(Field('opponent', 'Opponent'))
    table.addField(Field('matches', 'Matches', type='int'))
    table.addField(Field('winRate', 'Score %', type='percent'))
    for kind, rows in (('Best', best), ('Worst', worst)):
        for r in rows:
            table.addRecord(kind, deckLabel(catalog, r.opponentDid,
                names.get(r.opponentDid)), r.matches, r.winRate)
    return table

def trendTable(points, title=None):
    table = Table(title)
    table.addField(Field('month', 'Month'))
    table.addField(Field('matches', 'Matches', type='int'))
    recordFields(table)
    table.addField(Field('winRate', 'Score %', type='percent'))
    for p in points:
        table.addRecord(p.month, p.matches, p.w, p.l, p.d, p.winRate)
    return table
