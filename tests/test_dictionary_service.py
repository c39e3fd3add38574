import pytest

from tinywords.services.dictionary_service import (
    DictionaryClient, DictionaryLookupError, WordValidityChecker
)

from fakes import FakeDictionaryClient, FakeResponse, FakeSession, lookup_failure, transport_error


def test_seed_words_are_valid_without_lookup(checker, dictionary_client):
    assert checker.is_valid_word(5, 'apple')
    assert checker.is_valid_word(3, ' sun ')
    assert dictionary_client.lookups == []


def test_empty_guess_is_invalid(checker, dictionary_client):
    assert not checker.is_valid_word(5, '   ')
    assert dictionary_client.lookups == []


def test_found_word_is_cached_and_becomes_known():
    client = FakeDictionaryClient({'CRANE': True})
    checker = WordValidityChecker(client=client)

    assert checker.is_valid_word(5, 'crane')
    assert checker.is_valid_word(5, 'CRANE')
    assert client.lookups == ['CRANE']
    assert checker.is_known(5, 'CRANE')


def test_not_found_is_invalid_and_cached():
    client = FakeDictionaryClient({'QZXVW': False})
    checker = WordValidityChecker(client=client)

    assert not checker.is_valid_word(5, 'QZXVW')
    assert not checker.is_valid_word(5, 'QZXVW')
    assert client.lookups == ['QZXVW']
    assert checker.cache['QZXVW'] is False


def test_lookup_failure_accepts_guess_without_caching():
    client = FakeDictionaryClient({'BLORP': lookup_failure()})
    checker = WordValidityChecker(client=client)

    assert checker.is_valid_word(5, 'BLORP')
    assert 'BLORP' not in checker.cache
    assert checker.is_valid_word(5, 'BLORP')
    assert client.lookups == ['BLORP', 'BLORP']


def test_added_word_is_known_for_its_length(checker, dictionary_client):
    checker.add_word(4, 'kite')

    assert checker.is_valid_word(4, 'KITE')
    assert checker.cache['KITE'] is True
    assert dictionary_client.lookups == []


def test_cached_true_promotes_into_other_length_set():
    checker = WordValidityChecker(client=FakeDictionaryClient(), seed_words={}, cache={'OWL': True})

    assert checker.is_valid_word(3, 'OWL')
    assert checker.is_known(3, 'OWL')


def test_stores_are_per_instance():
    first = WordValidityChecker(client=FakeDictionaryClient())
    second = WordValidityChecker(client=FakeDictionaryClient())

    first.add_word(5, 'ZEBRA')

    assert first.is_known(5, 'ZEBRA')
    assert not second.is_known(5, 'ZEBRA')


def test_client_requests_lowercase_word():
    session = FakeSession(FakeResponse(200, [{'word': 'crane'}]))
    client = DictionaryClient(api_base='https://dict.test/entries/en/', timeout=2, session=session)

    assert client.lookup('CRANE') is True
    assert session.calls == [('https://dict.test/entries/en/crane', 2)]


def test_client_treats_404_as_not_found():
    client = DictionaryClient(api_base='https://dict.test', session=FakeSession(FakeResponse(404)))
    assert client.lookup('QZXVW') is False


def test_client_treats_empty_list_as_not_found():
    client = DictionaryClient(api_base='https://dict.test', session=FakeSession(FakeResponse(200, [])))
    assert client.lookup('QZXVW') is False


@pytest.mark.parametrize('session', [
    FakeSession(FakeResponse(500)),
    FakeSession(FakeResponse(200, ValueError('not json'))),
    FakeSession(error=transport_error()),
])
def test_client_raises_when_no_definitive_answer(session):
    client = DictionaryClient(api_base='https://dict.test', session=session)
    with pytest.raises(DictionaryLookupError):
        client.lookup('CRANE')
