"""
Brand graph analysis - CLI tool.

Builds the brand graph from a JSON batch of analysis records, runs PageRank
and Louvain, and prints the insight snapshot as JSON.

Input file format:
    {
      "brand_name": "Acme",
      "competitors": ["Foo", "Bar"],
      "records": [ {record_id, analysis, competitor_names}, ... ]
    }

With --cache-rows, "records" holds consolidated-analysis cache rows
(collector_result_id, keywords, sentiment, products, quotes) instead.

Usage:
    python scripts/analyze_brand.py batch.json
    python scripts/analyze_brand.py batch.json --summary
    python scripts/analyze_brand.py rows.json --cache-rows -o snapshot.json
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from brandgraph.core.config import get_settings, load_dotenv_if_exists
from brandgraph.core.schemas import AnalysisRecordInput
from brandgraph.service import BrandGraphService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger("analyze_brand")


def load_batch(path: Path, cache_rows: bool) -> tuple[str, list[str], list]:
    """Read brand name, competitors and records from a JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    brand_name = data["brand_name"]
    competitors = data.get("competitors") or []
    records = data.get("records") or []

    if cache_rows:
        # Validated per record by the builder
        records = [AnalysisRecordInput.cache_row_payload(row, competitors) for row in records]

    return brand_name, competitors, records


def main():
    parser = argparse.ArgumentParser(
        description="BrandGraph - build the brand knowledge graph and print insights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input_path",
        type=Path,
        help="JSON file with brand_name, competitors and records"
    )
    parser.add_argument(
        "--cache-rows", action="store_true",
        help="Records are consolidated-analysis cache rows"
    )
    parser.add_argument(
        "--summary", action="store_true",
        help="Only print the top insights of each kind"
    )
    parser.add_argument(
        "-o", "--output", type=Path,
        help="Write the snapshot JSON to this file instead of stdout"
    )
    args = parser.parse_args()

    load_dotenv_if_exists()
    settings = get_settings()

    if not args.input_path.exists():
        logger.error(f"Input file not found: {args.input_path}")
        sys.exit(1)

    brand_name, competitors, records = load_batch(args.input_path, args.cache_rows)
    if not records:
        logger.warning("No analysis records found, graph will only hold seed nodes")

    service = BrandGraphService(settings)
    snapshot = service.analyze(brand_name, competitors, records)

    if args.summary:
        summary = snapshot.summary(settings.insights.snapshot_limit)
        payload = {
            kind: [i.model_dump(mode="json") for i in insights]
            for kind, insights in summary.items()
        }
    else:
        payload = snapshot.to_dict()

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        logger.info(f"Snapshot written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
