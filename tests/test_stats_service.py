import json
from datetime import date, timedelta

from tinywords.services.stats_service import (
    ANON_ID_KEY, STATS_KEY, JsonFileStore, MemoryStore, StatsLedger, get_or_create_anon_id
)

from fakes import FixedClock


def test_empty_ledger(ledger):
    stats = ledger.get_stats()

    assert (stats.wins_today, stats.streak, stats.total_games) == (0, 0, 0)


def test_streak_counts_consecutive_win_days():
    clock = FixedClock(date(2024, 3, 10))
    ledger = StatsLedger(MemoryStore(), clock=clock)

    ledger.record_game(True)
    clock.current += timedelta(days=1)
    ledger.record_game(True)

    stats = ledger.get_stats()
    assert stats.streak == 2
    assert stats.wins_today == 1

    clock.current += timedelta(days=1)
    stats = ledger.get_stats()
    assert stats.streak == 0
    assert stats.wins_today == 0
    assert stats.total_games == 2


def test_loss_today_does_not_start_a_streak(clock, ledger):
    ledger.record_game(False)

    stats = ledger.get_stats()
    assert stats.streak == 0
    assert stats.total_games == 1


def test_gap_day_breaks_streak():
    clock = FixedClock(date(2024, 3, 1))
    ledger = StatsLedger(MemoryStore(), clock=clock)

    ledger.record_game(True)
    clock.current = date(2024, 3, 3)
    ledger.record_game(True)
    ledger.record_game(True)
    ledger.record_game(False)

    stats = ledger.get_stats()
    assert stats.streak == 1
    assert stats.wins_today == 2
    assert stats.total_games == 4


def test_streak_crosses_month_boundary():
    clock = FixedClock(date(2024, 2, 28))
    ledger = StatsLedger(MemoryStore(), clock=clock)

    for _ in range(3):
        ledger.record_game(True)
        clock.current += timedelta(days=1)
    clock.current -= timedelta(days=1)

    assert clock.current == date(2024, 3, 1)
    assert ledger.get_stats().streak == 3


def test_records_are_only_appended(ledger):
    ledger.record_game(True)
    ledger.record_game(False)

    records = ledger.records()
    assert [(record.date, record.win) for record in records] == [('2024-03-10', True), ('2024-03-10', False)]


def test_payload_shape_and_anon_id():
    store = MemoryStore()
    ledger = StatsLedger(store, clock=FixedClock())
    ledger.record_game(True)

    payload = json.loads(store.get(STATS_KEY))
    assert payload['anonId'] == store.get(ANON_ID_KEY)
    assert payload['anonId'].startswith('tlw_anon_')
    assert payload['games'] == [{'date': '2024-03-10', 'win': True}]
    assert get_or_create_anon_id(store) == payload['anonId']


def test_corrupt_payload_is_treated_as_empty():
    store = MemoryStore()
    store.set(STATS_KEY, '{not json')
    ledger = StatsLedger(store, clock=FixedClock())

    assert ledger.get_stats().total_games == 0
    ledger.record_game(True)
    assert ledger.get_stats().total_games == 1


def test_foreign_payload_is_replaced():
    store = MemoryStore()
    store.set(STATS_KEY, json.dumps({'games': 'nope'}))
    ledger = StatsLedger(store, clock=FixedClock())

    ledger.record_game(False)

    assert ledger.get_stats().total_games == 1


def test_unusable_payload_is_kept_before_replacing():
    store = MemoryStore()
    store.set(STATS_KEY, '{not json')
    ledger = StatsLedger(store, clock=FixedClock())

    ledger.record_game(True)
    store.set(STATS_KEY, '[]')
    ledger.record_game(False)

    assert store.get(f'{STATS_KEY}.corrupt-2024-03-10') == '{not json'
    assert store.get(f'{STATS_KEY}.corrupt-2024-03-10-2') == '[]'
    assert ledger.get_stats().total_games == 1


def test_reading_stats_does_not_create_files(tmp_path):
    ledger = StatsLedger(JsonFileStore(tmp_path / 'kid'), clock=FixedClock())

    assert ledger.get_stats().total_games == 0
    assert not (tmp_path / 'kid').exists()

    ledger.record_game(True)
    assert (tmp_path / 'kid' / f'{STATS_KEY}.json').exists()


def test_file_store_persists_across_ledgers(tmp_path):
    clock = FixedClock()
    StatsLedger(JsonFileStore(tmp_path / 'kid'), clock=clock).record_game(True)

    reopened = StatsLedger(JsonFileStore(tmp_path / 'kid'), clock=clock)

    assert reopened.get_stats().wins_today == 1
    assert (tmp_path / 'kid' / f'{STATS_KEY}.json').exists()
    assert not list((tmp_path / 'kid').glob('*.tmp'))
