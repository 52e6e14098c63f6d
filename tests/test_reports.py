"""Table formatting and the report tables."""

import io

from swissmeta.table import Table, Field
from swissmeta.stats import getStandings, getDeckStats, getDeckMatchups
from swissmeta.decklab import getDeckVsField, getBestWorst, getDeckTrendByMonth
from swissmeta.catalog import DeckCatalog, DeckCatalogItem
from swissmeta.reports import (standingsTable, deckStatsTable, matchupsTable,
        pairingsTable, vsFieldTable, bestWorstTable, trendTable)


def render(table, output='table', limit=None):
    stream = io.StringIO()
    table.write(output, limit=limit, stream=stream)
    return stream.getvalue()

def fiveRounds(build):
    """Suisei goes 3-2 against Miko."""
    return build(['Alice', 'Bob'], entries={ 'Alice': 'suisei', 'Bob': 'miko' },
            rounds=[ [ ('Alice', 'Bob', r) ] for r in 'AABBA' ])


class TestTable:

    def test_field_formats(self):
        percent = Field('rate', type='percent')
        assert percent.formatText(0.5) == '50.0%'
        assert percent.formatData(0.5) == '0.5000'
        assert percent.formatData(None) == 'NaN'
        assert percent.formatText(None) == '---'
        assert Field('n', type='int').formatText(3.0) == '3'
        assert Field('name').formatData(None) == ''
        assert percent.align == '>'

    def test_gate(self):
        field = Field('winRate', type='percent', gate=6)
        assert field.formatCell({ 'winRate': 0.6, 'matches': 5 }) == 'n<6'
        assert field.formatCell({ 'winRate': 0.6, 'matches': 6 }) == '60.0%'

    def test_layout_and_limit(self):
        table = Table('Scores')
        table.addField(Field('name', 'Name'))
        table.addField(Field('score', 'Score', type='int'))
        table.addRecord('Alice', 10)
        table.addRecord('Bob', 7)
        text = render(table, limit=1)
        lines = text.splitlines()
        assert lines[0] == 'Scores'
        assert lines[1] == '+-------+-------+'
        assert lines[2] == '| Name  | Score |'
        assert lines[4] == '| Alice |    10 |'
        assert 'Bob' not in text
        assert table.getColumn('score') == [10, 7]

    def test_delimited(self):
        table = Table()
        table.addField(Field('name', 'Name'))
        table.addField(Field('note', 'Note'))
        table.addRecord('Alice', 'a,b')
        assert render(table, 'csv') == 'Name,Note\nAlice,a\\,b\n'
        assert render(table, 'tab') == 'Name\tNote\nAlice\ta,b\n'


class TestReports:

    def test_standings(self, weekly):
        table = standingsTable(getStandings(weekly), title=weekly.name)
        assert table.getColumn('name') == ['Carol', 'Alice', 'Bob', 'Dan']
        assert table.getColumn('rank') == [1, 2, 3, 4]

    def test_insufficient_sample(self, build):
        stats = getDeckStats(fiveRounds(build))
        assert stats[0].matches == 5
        assert stats[0].winRate == 0.6
        gated = render(deckStatsTable(stats, minSample=6))
        assert 'n<6' in gated
        assert '60.0%' not in gated
        assert '60.0%' in render(deckStatsTable(stats))
        # Delimited output keeps the raw value.
        assert '0.6000' in render(deckStatsTable(stats, minSample=6), 'csv')

    def test_catalog_labels(self, weekly):
        catalog = DeckCatalog([ DeckCatalogItem('suisei', 'Hoshimachi Suisei') ])
        table = deckStatsTable(getDeckStats(weekly), catalog)
        assert table.getColumn('deck') == ['Hoshimachi Suisei', 'Miko', 'Pekora']
        cells = matchupsTable(getDeckMatchups(weekly), catalog, weekly.getDeckNames())
        assert cells.getColumn('deckA')[0] == 'Miko'
        assert cells.getColumn('deckB')[0] == 'Hoshimachi Suisei'

    def test_pairings(self, build):
        t = build(['Alice', 'Bob', 'Carol'],
                rounds=[[ ('Alice', 'Bob', None), ('Carol', None, 'BYE') ]])
        table = pairingsTable(t)
        assert table.getColumn('b') == ['Bob', '-']
        assert table.getColumn('result') == ['pending', 'BYE']

    def test_deck_lab(self, weekly):
        result = getDeckVsField([weekly], 'suisei')
        table = vsFieldTable(result, names=weekly.getDeckNames())
        assert len(table) == len(result.rows) + 1
        assert table.getColumn('opponent')[-1] == 'Overall (1 events)'
        best, worst = getBestWorst(result.rows)
        assert len(bestWorstTable(best, worst)) == 0
        trend = trendTable(getDeckTrendByMonth([weekly], 'suisei'))
        assert trend.getColumn('month') == ['2026-02']
