from pricematch.constants import STOP_WORDS
from pricematch.normalize import ordered_keywords, tokenize


def test_tokenize_lowercases_and_strips_punctuation():
    tokens = tokenize("iPhone 14 Pro-Max Case!!! (Clear)")
    assert tokens == {"iphone", "14", "pro-max", "case", "clear"}


def test_tokenize_drops_stop_words_and_empty_tokens():
    tokens = tokenize("Case for the iPhone with   Free Shipping")
    assert tokens == {"case", "iphone"}
    assert not tokens & STOP_WORDS
    assert "" not in tokens


def test_tokenize_collapses_repeats():
    assert tokenize("case CASE Case") == {"case"}


def test_tokenize_is_idempotent_on_its_output():
    first = tokenize("Magnetic Wireless Charger, 15W fast-charge for iPhone")
    again = tokenize(" ".join(sorted(first)))
    assert again == first


def test_tokenize_empty_input():
    assert tokenize("") == frozenset()
    assert tokenize(None) == frozenset()
    assert tokenize("!!! ,,, ???") == frozenset()


def test_ordered_keywords_keeps_first_occurrence_order():
    assert ordered_keywords("USB cable charger cable") == ["usb", "cable", "charger"]
    assert set(ordered_keywords("USB cable charger cable")) == tokenize("USB cable charger cable")


def test_tokenize_keeps_hyphen_only_tokens():
    assert tokenize("a - b") == {"-", "b"}
