import json

import pytest

from swissmeta.tournament import Tournament, dumpTournamentFile

def buildTournament(players, entries=None, rounds=None, tid='t1',
        date='2026-02-03', rules=None, decks=None, name=None):
    """Build a Tournament through the file model.

    players: Player names; the pid is the lowercased name.
    entries: Dictionary of player name to did.
    rounds: List of rounds, each a list of (a, b, result) tuples of player
            names; b is None for a bye, result None while pending.
    decks: Dictionary of did to deck name (defaults to the did titled).
    """
    entries = entries or {}
    rounds = rounds or []
    dids = sorted(set(entries.values()))
    if decks is None:
        decks = { did: did.title() for did in dids }
    data = {
        'id': tid,
        'name': name or tid,
        'date': date,
        'format': { 'type': 'swiss', 'rounds': max(len(rounds), 1),
            'rules': rules or { 'winPoints': 3, 'drawPoints': 1, 'lossPoints': 0 } },
        'players': [ { 'pid': p.lower(), 'name': p } for p in players ],
        'decks': [ { 'did': did, 'name': n } for did, n in decks.items() ],
        'entries': [ { 'pid': p.lower(), 'did': did } for p, did in entries.items() ],
        'rounds': []
    }
    for i, matches in enumerate(rounds):
        rd = { 'r': i + 1, 'locked': True, 'matches': [] }
        for j, (a, b, result) in enumerate(matches):
            m = { 'mid': '{0}-r{1}-m{2}'.format(tid, i + 1, j + 1), 'table': j + 1,
                    'a': a.lower() }
            if b is not None:
                m['b'] = b.lower()
            if result is not None:
                m['result'] = result
            rd['matches'].append(m)
        data['rounds'].append(rd)
    return Tournament.fromDict(data)

@pytest.fixture
def build():
    return buildTournament

@pytest.fixture
def weekly(build):
    """Four players, two rounds, three decks and one draw."""
    return build(['Alice', 'Bob', 'Carol', 'Dan'],
            entries={ 'Alice': 'suisei', 'Bob': 'miko', 'Carol': 'suisei',
                'Dan': 'pekora' },
            rounds=[
                [ ('Alice', 'Bob', 'A'), ('Carol', 'Dan', 'D') ],
                [ ('Alice', 'Carol', 'B'), ('Dan', 'Bob', 'B') ],
            ])

CATALOG = [
    { 'key': 'suisei', 'name': 'Hoshimachi Suisei', 'aliases': ['Suisei'],
        'color': '#3b82f6' },
    { 'key': 'miko', 'name': 'Sakura Miko', 'color': '#ec4899' },
]

@pytest.fixture
def archiveDir(tmp_path, build):
    """A local archive of three tournaments over two months, with a deck
    catalog."""
    tournaments = [
        build(['Alice', 'Bob'], entries={ 'Alice': 'suisei', 'Bob': 'miko' },
            rounds=[[ ('Alice', 'Bob', 'A') ]], tid='feb1', date='2026-02-03'),
        build(['Alice', 'Carol'], entries={ 'Alice': 'suisei', 'Carol': 'pekora' },
            rounds=[[ ('Carol', 'Alice', 'D') ]], tid='feb2', date='2026-02-17'),
        build(['Alice', 'Bob'], entries={ 'Alice': 'miko', 'Bob': 'suisei' },
            rounds=[[ ('Alice', 'Bob', 'B') ]], tid='mar1', date='2026-03-03'),
    ]
    folder = tmp_path / 'data' / 'tournaments'
    folder.mkdir(parents=True)
    index = []
    for t in tournaments:
        path = 'data/tournaments/{0}.json'.format(t.id)
        dumpTournamentFile(t, str(tmp_path / path))
        index.append({ 'id': t.id, 'date': t.date, 'name': t.name, 'path': path })
    # Not in date order on purpose.
    index = [ index[1], index[2], index[0] ]
    (folder / 'index.json').write_text(json.dumps(index), encoding='utf-8')
    (tmp_path / 'data' / 'config').mkdir()
    (tmp_path / 'data' / 'config' / 'decks.json').write_text(json.dumps(CATALOG),
            encoding='utf-8')
    return tmp_path
