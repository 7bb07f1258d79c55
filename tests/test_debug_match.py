import json
from argparse import Namespace

from pricematch import debug_match


def test_debug_match_ranks_csv_candidates(tmp_path, capsys):
    ref = tmp_path / "ref.json"
    ref.write_text(json.dumps({"title": "iPhone 14 Case", "price": 15}), encoding="utf-8")
    cands = tmp_path / "cands.csv"
    cands.write_text(
        "productId,title,salePrice,currencyCode\n"
        "1,Clear Case iPhone 14,4.50,USD\n"
        "2,Screen Protector iPhone 14,2.00,USD\n"
        "3,Leather Case iPhone 14,25.00,USD\n",
        encoding="utf-8",
    )
    args = Namespace(reference=str(ref), candidates=str(cands), secondary=None, strategy="rank", top=0)
    df = debug_match.main(args)
    assert list(df["title"]) == ["Clear Case iPhone 14"]
    assert "Clear Case iPhone 14" in capsys.readouterr().out


def test_debug_match_merges_json_lists(tmp_path):
    a = tmp_path / "a.json"
    b = tmp_path / "b.json"
    a.write_text(json.dumps([{"productId": "1"}, {"productId": "2"}]), encoding="utf-8")
    b.write_text(json.dumps([{"productId": "2"}, {"productId": "3"}]), encoding="utf-8")
    args = Namespace(reference=None, candidates=str(a), secondary=str(b), strategy="merge", top=2)
    df = debug_match.main(args)
    assert list(df["productId"]) == ["1", "2"]
