"""Live result entry, persisted in a SQLite file."""

import pytest

from swissmeta.database import LiveStore, LiveRecord
from swissmeta.live import (LiveTournament, LiveError, RoundLockedError,
        RoundIncompleteError, makeTournament)
from swissmeta.tournament import loadTournamentFile


@pytest.fixture
def url(tmp_path):
    return 'sqlite:///{0}'.format(tmp_path / 'live.db')

@pytest.fixture
def live(url):
    live = LiveTournament(LiveStore(url))
    live.newTournament('Friday Swiss', '2026-03-06', 2)
    return live


def test_make_tournament():
    t = makeTournament('Friday Swiss', '2026-03-06', 3)
    assert t.id.startswith('2026-03-06_weekly_')
    assert len(t.id) == len('2026-03-06_weekly_') + 4
    assert t.numRounds == 3
    assert t.rules.winPoints == 3

def test_empty_store(url):
    store = LiveStore(url)
    assert store.load() is None
    live = LiveTournament(store)
    assert live.tournament.players == []

def test_roster(live):
    alice = live.addPlayer('  Alice ')
    assert alice.name == 'Alice'
    assert live.addPlayer('   ') is None
    bob = live.addPlayer('Bob')
    assert alice.pid != bob.pid
    live.setEntry(alice.pid, 'suisei', 'Suisei')
    live.setEntry(bob.pid, 'miko')
    t = live.tournament
    assert t.getEntryMap() == { alice.pid: 'suisei', bob.pid: 'miko' }
    assert t.getDeckNames() == { 'suisei': 'Suisei', 'miko': 'miko' }
    live.setEntry(bob.pid, 'suisei')
    assert [ d.did for d in t.decks ] == ['suisei']
    live.setEntry(bob.pid, '')
    assert t.getEntryMap() == { alice.pid: 'suisei' }
    with pytest.raises(LiveError):
        live.setEntry('nobody', 'miko')

def test_removing_an_entry_ignores_the_deck_name(live):
    alice = live.addPlayer('Alice')
    live.setEntry(alice.pid, 'suisei', 'Suisei')
    live.setEntry(alice.pid, '', 'Ghost')
    t = live.tournament
    assert t.getEntryMap() == {}
    assert t.decks == []
    live.setEntry(alice.pid, 'miko')
    assert t.getDeckNames() == { 'miko': 'miko' }

def test_round_workflow(live, url):
    alice = live.addPlayer('Alice')
    bob = live.addPlayer('Bob')
    carol = live.addPlayer('Carol')
    live.setEntry(alice.pid, 'suisei')
    live.setEntry(bob.pid, 'miko')

    with pytest.raises(LiveError):
        live.addMatch(alice.pid, bob.pid)
    rd = live.startRound()
    assert rd.r == 1
    m = live.addMatch(alice.pid, bob.pid)
    bye = live.addMatch(carol.pid)
    assert bye.result == 'BYE' and bye.table == 2
    with pytest.raises(LiveError):
        live.addMatch(alice.pid, alice.pid)
    with pytest.raises(LiveError):
        live.addMatch(alice.pid, 'nobody')

    with pytest.raises(RoundIncompleteError):
        live.closeRound()
    with pytest.raises(RoundIncompleteError):
        live.startRound()
    with pytest.raises(LiveError):
        live.setResult(1, m.mid, 'X')
    with pytest.raises(LiveError):
        live.setResult(1, m.mid, 'BYE')
    with pytest.raises(LiveError):
        live.setResult(1, 'missing', 'A')
    with pytest.raises(LiveError):
        live.setResult(5, m.mid, 'A')

    live.setResult(1, m.mid, 'A')
    assert live.closeRound().locked
    with pytest.raises(RoundLockedError):
        live.setResult(1, m.mid, 'B')
    with pytest.raises(RoundLockedError):
        live.addMatch(alice.pid, bob.pid)

    # Every edit was saved.
    reloaded = LiveTournament(LiveStore(url))
    standings = reloaded.standings()
    assert [ s.name for s in standings ] == ['Alice', 'Carol', 'Bob']
    stats = { s.did: s for s in reloaded.deckStats() }
    assert stats['suisei'].wins == 1 and stats['miko'].losses == 1
    assert stats['suisei'].metaShare == pytest.approx(1 / 3)
    assert len(reloaded.matchups()) == 1

    live.startRound()
    assert live.closeRound().r == 2
    with pytest.raises(LiveError):
        live.startRound()

def test_locked_round_keeps_its_result(live):
    alice = live.addPlayer('Alice')
    bob = live.addPlayer('Bob')
    live.startRound()
    m = live.addMatch(alice.pid, bob.pid)
    live.setResult(1, m.mid, 'D')
    live.closeRound()
    with pytest.raises(RoundLockedError):
        live.setResult(1, m.mid, 'A')
    assert live.tournament.rounds[0].getMatch(m.mid).result == 'D'

def test_export(live, tmp_path):
    live.addPlayer('Alice')
    path = live.export(str(tmp_path / 'friday.json'))
    t = loadTournamentFile(path)
    assert t.toDict() == live.tournament.toDict()
    assert t.name == 'Friday Swiss'

def test_reset(live, url):
    live.addPlayer('Alice')
    live.reset()
    assert live.tournament.players == []
    assert LiveStore(url).load() is None

def test_unreadable_blob_is_ignored(url):
    store = LiveStore(url)
    with store.sessionmaker() as session:
        session.add(LiveRecord(store.key, 'not json'))
        session.commit()
    assert store.load() is None

def test_in_memory_tournament():
    live = LiveTournament(tournament=makeTournament('Test', '2026-03-06', 1))
    p = live.addPlayer('Alice')
    live.startRound()
    assert live.addMatch(p.pid).result == 'BYE'
    live.closeRound()
    assert live.standings()[0].points == 3
