from pricematch.config import Candidate, MergedResult, RankedResult
from pricematch.mapping import dedup_merge, map_ranked_to_response, to_match_item
from pricematch.pipeline_types import ScoredCandidate


def test_dedup_merge_keeps_primary_version_and_appends_new():
    a = [Candidate(product_id="1", title="A1"), Candidate(product_id="2", title="A2")]
    b = [Candidate(product_id="2", title="B2"), Candidate(product_id="3", title="B3")]
    merged = dedup_merge(a, b)
    assert [c.product_id for c in merged] == ["1", "2", "3"]
    assert merged[1].title == "A2"


def test_dedup_merge_collapses_duplicates_within_one_list():
    a = [Candidate(product_id=7), Candidate(product_id="7"), Candidate(product_id=8)]
    merged = dedup_merge(a, [])
    assert [c.product_id for c in merged] == ["7", "8"]


def test_to_match_item_output_shape():
    cand = Candidate(
        product_id="1",
        title="Phone Case",
        sale_price="8.00",
        promotion_link="https://s.click.example/1",
        image_url="https://img.example/1.jpg",
        currency_code="USD",
    )
    sc = ScoredCandidate(candidate=cand, score=0.3, price=8.0, price_display="8.00 USD")
    item = to_match_item(sc, source_label="TestShop")
    data = item.model_dump(by_alias=True)
    assert data == {
        "title": "Phone Case",
        "link": "https://s.click.example/1",
        "price": 8.0,
        "priceDisplay": "8.00 USD",
        "sourceLabel": "TestShop",
        "imageUrl": "https://img.example/1.jpg",
        "score": 0.3,
    }


def test_map_ranked_to_response_structure():
    cand = Candidate(product_id="1", title="Case")
    sc = ScoredCandidate(candidate=cand, score=0.5, price=2.0, price_display="2.00 USD")
    resp = map_ranked_to_response([sc])
    assert isinstance(resp, RankedResult)
    assert resp.kind == "rank"
    assert len(resp.matches) == 1
    assert resp.matches[0].source_label
    assert MergedResult(products=[cand]).kind == "merge"
