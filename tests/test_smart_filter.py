from types import MappingProxyType

from pricematch.config import Candidate
from pricematch.smart_filter import detect_core_noun, smart_filter


def _cand(pid, title):
    return Candidate(product_id=pid, title=title, sale_price=1)


def test_detect_core_noun_uses_scan_order():
    assert detect_core_noun(["iphone", "charger", "case"]) == "charger"
    assert detect_core_noun(["iphone", "case", "charger"]) == "case"
    assert detect_core_noun(["iphone", "14"]) is None


def test_case_reference_drops_screen_protectors():
    cands = [
        _cand("1", "Phone Case for iPhone 14"),
        _cand("2", "Screen Protector for iPhone 14"),
        _cand("3", "Tempered Glass iPhone 14"),
        _cand("4", "Silicone Case iPhone 14 Pro"),
    ]
    kept = smart_filter(cands, ["iphone", "14", "case"])
    assert [c.product_id for c in kept] == ["1", "4"]


def test_no_core_noun_keeps_everything():
    cands = [_cand("1", "Screen Protector"), _cand("2", "Phone Case")]
    kept = smart_filter(cands, ["iphone", "14"])
    assert kept == cands


def test_core_noun_without_conflict_rule_keeps_everything():
    cands = [_cand("1", "Screen Protector"), _cand("2", "Phone Case")]
    kept = smart_filter(
        cands,
        ["widget"],
        vocabulary=frozenset({"widget"}),
        conflicts=MappingProxyType({}),
    )
    assert kept == cands


def test_filter_removes_iff_forbidden_substring_present():
    conflicts = MappingProxyType({"case": frozenset({"screen", "glass"})})
    cands = [
        _cand("1", "Case with SCREEN guard"),
        _cand("2", "Leather case"),
        _cand("3", "Fiberglass case"),
        _cand("4", "Wallet case"),
    ]
    kept = smart_filter(cands, ["case"], vocabulary=frozenset({"case"}), conflicts=conflicts)
    assert len(kept) <= len(cands)
    for c in cands:
        forbidden_hit = any(tok in c.title.lower() for tok in conflicts["case"])
        assert (c in kept) != forbidden_hit
