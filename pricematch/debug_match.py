# pricematch/debug_match.py
import argparse
import json
from pathlib import Path
from typing import List

import pandas as pd

from .config import Candidate, MergedResult, ReferenceItem
from .pipeline import run_full_pipeline
from .pipeline_types import Strategy
from .upstream import candidates_from_payload


def load_candidates(path: Path) -> List[Candidate]:
    """
    Candidates from a CSV (one listing per row), a JSON list of records, or a
    raw upstream JSON payload.
    """
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        return [Candidate.model_validate(rec) for rec in df.to_dict(orient="records")]

    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, list):
        return [Candidate.model_validate(rec) for rec in raw]
    return candidates_from_payload(raw)


def load_reference(path: Path) -> ReferenceItem:
    with path.open("r", encoding="utf-8") as f:
        return ReferenceItem.model_validate(json.load(f))


def result_frame(result) -> pd.DataFrame:
    if isinstance(result, MergedResult):
        rows = [p.model_dump(by_alias=True) for p in result.products]
        return pd.DataFrame(rows, columns=["productId", "title", "salePrice", "currencyCode"])
    rows = [m.model_dump(by_alias=True) for m in result.matches]
    return pd.DataFrame(rows, columns=["score", "priceDisplay", "title", "link"])


def main(args):
    candidates = load_candidates(Path(args.candidates))
    secondary = load_candidates(Path(args.secondary)) if args.secondary else []
    reference = load_reference(Path(args.reference)) if args.reference else None

    result = run_full_pipeline(
        args.strategy,
        reference=reference,
        candidates=candidates,
        secondary=secondary,
    )
    df = result_frame(result)
    if args.top:
        df = df.head(args.top)

    print(f"Strategy: {args.strategy}")
    print(f"Candidates in: {len(candidates) + len(secondary)}  out: {len(df)}\n")
    if df.empty:
        print("<no matches>")
    else:
        if "score" in df.columns:
            df["score"] = df["score"].map(lambda s: f"{s:.4f}")
        print(df.to_string(index=False))
    return df


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--reference")
    ap.add_argument("--candidates", required=True)
    ap.add_argument("--secondary")
    ap.add_argument("--strategy", choices=[s.value for s in Strategy], default=Strategy.RANK.value)
    ap.add_argument("--top", type=int, default=0)
    main(ap.parse_args())
