#!/usr/bin/env python

import sys
import argparse

from swissmeta.config import (getLogger, defaultBase, defaultMinSample,
        defaultLabMinSample, defaultLastN, defaultTopSlices)
from swissmeta.tournament import SwissMetaError, Rules, loadTournamentFile
from swissmeta.stats import getStandings, getDeckStats, getDeckMatchups
from swissmeta.aggregate import (aggregatePlayersAndDecks, getDecksByMeta,
        getDecksByWinRate, getDecksByDominance)
from swissmeta.decklab import (getDeckVsField, getBestWorst,
        getDeckTrendByMonth, filterRows, sortRows, DeckVsField)
from swissmeta.archive import Archive, ArchiveError, selectWindow, getMonths, MODES
from swissmeta.catalog import loadDeckCatalog
from swissmeta.database import LiveStore
from swissmeta.live import LiveTournament
from swissmeta.reports import *

logger = getLogger(__name__)

# Wrapper functions to access the reports via the command line. Each takes
# the parsed arguments and returns a Table to print, or None.

def standingsWrapper(args):
    t = loadTournamentFile(args.file)
    return standingsTable(getStandings(t), title=t.name)

def decksWrapper(args):
    t = loadTournamentFile(args.file)
    return deckStatsTable(getDeckStats(t), loadCatalog(args.base),
            minSample=args.min_sample, title=t.name)

def matchupsWrapper(args):
    t = loadTournamentFile(args.file)
    return matchupsTable(getDeckMatchups(t), loadCatalog(args.base),
            names=t.getDeckNames(), title=t.name)

def loadCatalog(base):
    """Load the deck catalog if the archive has one. Reports fall back to
    the names recorded in the tournaments."""
    try:
        return loadDeckCatalog(base)
    except ArchiveError as e:
        logger.warning('No deck catalog: %s', e)
        return None

def loadWindow(args):
    """Load the tournaments selected by the window options."""
    archive = Archive(args.base)
    index = archive.loadIndex()
    items = selectWindow(index, args.mode, month=args.month, last=args.last,
            tid=args.id)
    if not items:
        if args.mode == 'month' and args.month:
            logger.warning('No tournaments in %s; archived months: %s', args.month,
                    ', '.join(getMonths(index)))
        else:
            logger.warning('No tournaments in the selected window')
    return archive.loadTournaments(items)

def archiveWrapper(args):
    tournaments = loadWindow(args)
    catalog = loadCatalog(args.base)
    agg = aggregatePlayersAndDecks(tournaments)
    title = '{0} tournament(s), {1} entries'.format(len(tournaments), agg.totalEntries)
    if args.view == 'players':
        return playersTable(agg.players, title=title)
    if args.view == 'winrate':
        decks = getDecksByWinRate(agg, args.min_sample)
        table = decksTable(decks, catalog, title=title)
    elif args.view == 'dominance':
        decks = getDecksByDominance(agg, args.min_sample)
        table = decksTable(decks, catalog, dominance=True, title=title)
    else:
        decks = getDecksByMeta(agg)
        table = decksTable(decks, catalog, minSample=args.min_sample, title=title)
    if args.chart:
        from swissmeta import charts
        if args.view == 'meta':
            charts.metaPie(decks, args.chart, catalog, top=args.top)
        else:
            charts.winRateBar(getDecksByDominance(agg, args.min_sample), args.chart,
                    catalog)
    return table

def labWrapper(args):
    tournaments = loadWindow(args)
    catalog = loadCatalog(args.base)
    names = {}
    for t in tournaments:
        for did, name in t.getDeckNames().items():
            names.setdefault(did, name)
    label = deckLabel(catalog, args.deck, names.get(args.deck))
    if args.view == 'trend':
        points = getDeckTrendByMonth(tournaments, args.deck, args.opponent)
        title = label
        if args.opponent:
            title += ' vs. ' + deckLabel(catalog, args.opponent, names.get(args.opponent))
        if args.chart:
            from swissmeta import charts
            charts.trendLine(points, args.chart, title=title)
        return trendTable(points, title=title)
    result = getDeckVsField(tournaments, args.deck)
    if args.view == 'best':
        best, worst = getBestWorst(result.rows, args.min_sample)
        return bestWorstTable(best, worst, catalog, names, title=label)
    rows = sortRows(filterRows(result.rows, args.min_sample), args.sort)
    return vsFieldTable(DeckVsField(result.summary, rows), catalog, names,
            title=label)

def liveWrapper(args):
    live = LiveTournament(LiveStore(args.db))
    t = live.tournament
    if args.action == 'new':
        rules = None
        if args.points:
            rules = Rules(*args.points)
        t = live.newTournament(args.name, args.date, args.rounds, rules)
        print('Started {0} ({1})'.format(t.name, t.id))
    elif args.action == 'player':
        for name in args.names:
            p = live.addPlayer(name)
            if p:
                print('{0}\t{1}'.format(p.pid, p.name))
    elif args.action == 'entry':
        live.setEntry(args.pid, args.did, args.deck_name)
    elif args.action == 'round':
        rd = live.startRound()
        print('Round {0} started'.format(rd.r))
    elif args.action == 'match':
        m = live.addMatch(args.a, args.b)
        print('{0}\ttable {1}'.format(m.mid, m.table))
    elif args.action == 'result':
        live.setResult(args.round, args.mid, args.result)
    elif args.action == 'close':
        rd = live.closeRound()
        print('Round {0} closed'.format(rd.r))
    elif args.action == 'export':
        print(live.export(args.path))
    elif args.action == 'reset':
        live.reset()
    elif args.action == 'show':
        if args.view == 'decks':
            return deckStatsTable(live.deckStats(), title=t.name)
        elif args.view == 'matchups':
            return matchupsTable(live.matchups(), names=t.getDeckNames(), title=t.name)
        elif args.view == 'rounds':
            return pairingsTable(t, title=t.name)
        return standingsTable(live.standings(), title=t.name)
    return None

def addWindowOptions(p):
    p.add_argument('-b', '--base', type=str, default=defaultBase(), help='Archive\
            directory or URL containing data/tournaments/index.json.')
    p.add_argument('-m', '--mode', choices=MODES, default='month', help='Window\
            of tournaments to analyze: one month, the last N, or a single one.')
    p.add_argument('-M', '--month', type=str, default=None, help='Month\
            (YYYY-MM) for --mode month; defaults to the latest month.')
    p.add_argument('-n', '--last', type=int, default=defaultLastN(), help='Number\
            of tournaments for --mode last.')
    p.add_argument('-i', '--id', type=str, default=None, help='Tournament id for\
            --mode single; defaults to the latest tournament.')
    p.add_argument('-c', '--chart', type=str, default=None, help='Also draw a\
            chart into this image file.')

def main(arglist):
    p = argparse.ArgumentParser(description="""Standings and metagame
            statistics for Swiss tournaments.""")
    p.add_argument('-l', '--limit', type=int, help='Only print the top X\
            results.')
    p.add_argument('-o', '--output', type=str, default='table',
            choices=('table', 'tab', 'csv'), help='\
            Specify output format:\
                table: human-readable table (default)\
                tab: tab-delimited table\
                csv: comma-delimited table')

    subp = p.add_subparsers(title='commands', help='Type of data to report. Required.',
            dest='option_name')

    standingsp = subp.add_parser('standings', help='Player standings of one tournament file.')
    standingsp.add_argument('file', type=str)
    standingsp.set_defaults(func=standingsWrapper)

    decksp = subp.add_parser('decks', help='Deck meta share and win rates of one tournament file.')
    decksp.add_argument('file', type=str)
    decksp.add_argument('-b', '--base', type=str, default=defaultBase(),
            help='Archive holding the deck catalog.')
    decksp.add_argument('-s', '--min_sample', type=int, default=None,
            help='Hide win rates of decks with fewer matches.')
    decksp.set_defaults(func=decksWrapper)

    matchupsp = subp.add_parser('matchups', help='Deck-vs-deck results of one tournament file.')
    matchupsp.add_argument('file', type=str)
    matchupsp.add_argument('-b', '--base', type=str, default=defaultBase(),
            help='Archive holding the deck catalog.')
    matchupsp.set_defaults(func=matchupsWrapper)

    archivep = subp.add_parser('archive', help='Player and deck leaderboards over archived tournaments.')
    addWindowOptions(archivep)
    archivep.add_argument('-v', '--view', choices=('meta', 'winrate', 'dominance',
            'players'), default='meta', help='Leaderboard to print.')
    archivep.add_argument('-s', '--min_sample', type=int, default=defaultMinSample(),
            help='Matches required before a deck win rate is ranked or shown.')
    archivep.add_argument('-t', '--top', type=int, default=defaultTopSlices(),
            help='Decks shown individually in the meta chart.')
    archivep.set_defaults(func=archiveWrapper)

    labp = subp.add_parser('lab', help='Matchups and monthly trend of one deck.')
    labp.add_argument('deck', type=str, help='Deck id to analyze.')
    addWindowOptions(labp)
    labp.add_argument('-O', '--opponent', type=str, default=None,
            help='Restrict the trend to this opponent deck id.')
    labp.add_argument('-s', '--min_sample', type=int, default=defaultLabMinSample(),
            help='Matches required to show an opponent row.')
    labp.add_argument('-S', '--sort', choices=('matches', 'winrate'),
            default='matches', help='Order of the opponent rows.')
    labp.add_argument('-v', '--view', choices=('field', 'best', 'trend'),
            default='field', help='Versus-field table, best/worst opponents, or trend.')
    labp.set_defaults(func=labWrapper)

    livep = subp.add_parser('live', help='Enter results for the tournament in progress.')
    livep.add_argument('-d', '--db', type=str, default=None, help='Database\
            connection for the live tournament (default from config).')
    livesub = livep.add_subparsers(title='actions', dest='action')
    newp = livesub.add_parser('new', help='Start a new tournament.')
    newp.add_argument('-n', '--name', type=str, default=None)
    newp.add_argument('-D', '--date', type=str, default=None, help='YYYY-MM-DD, default today.')
    newp.add_argument('-r', '--rounds', type=int, default=None)
    newp.add_argument('-p', '--points', type=int, nargs=3, default=None,
            metavar=('WIN', 'DRAW', 'LOSS'), help='Points for a win, draw and loss.')
    playerp = livesub.add_parser('player', help='Add players by name.')
    playerp.add_argument('names', nargs='+', type=str)
    entryp = livesub.add_parser('entry', help='Assign a deck to a player.')
    entryp.add_argument('pid', type=str)
    entryp.add_argument('did', type=str, nargs='?', default='',
            help='Deck id; omit to remove the entry.')
    entryp.add_argument('-n', '--deck_name', type=str, default=None)
    livesub.add_parser('round', help='Start the next round.')
    matchp = livesub.add_parser('match', help='Pair two players; one player gets a bye.')
    matchp.add_argument('a', type=str)
    matchp.add_argument('b', type=str, nargs='?', default=None)
    resultp = livesub.add_parser('result', help='Record a match result.')
    resultp.add_argument('round', type=int)
    resultp.add_argument('mid', type=str)
    resultp.add_argument('result', choices=('A', 'B', 'D', 'BYE'))
    livesub.add_parser('close', help='Lock the current round.')
    showp = livesub.add_parser('show', help='Show standings, decks, matchups or rounds.')
    showp.add_argument('view', nargs='?', default='standings',
            choices=('standings', 'decks', 'matchups', 'rounds'))
    exportp = livesub.add_parser('export', help='Write the tournament JSON file.')
    exportp.add_argument('path', nargs='?', default=None)
    livesub.add_parser('reset', help='Discard the live tournament.')
    livep.set_defaults(func=liveWrapper)

    args = p.parse_args(arglist)
    if args.option_name is None or (args.option_name == 'live' and args.action is None):
        p.print_help()
        sys.exit(1)

    table = args.func(args)

    if table is not None:
        table.write(args.output, limit=args.limit)
    return table

def run():
    try:
        main(sys.argv[1:])
    except SwissMetaError as e:
        logger.error('%s', e)
        sys.exit(1)

if __name__ == '__main__':
    run()
