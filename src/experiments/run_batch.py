import argparse
import os
import sys

from src.analysis.grouping import batch_stats, group_by_file
from src.analysis.pipeline import SessionConfig, process_files
from src.models.llm_client import is_well_formed_credential
from src.models.variants import VARIANTS
from src.utils.config import DEFAULT_MODEL, DEFAULT_VARIANT, LOG_LEVEL, OPENAI_BASE_URL, get_api_key
from src.utils.credentials import load_api_key, save_api_key
from src.utils.csv_export import csv_filename, records_to_csv
from src.utils.io import load_files, write_json, write_text
from src.utils.logging_config import configure_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Classify every slide of the given decks and export a CSV.")
    parser.add_argument("files", nargs="+", help="PDF or PPTX files, processed in the order given")
    parser.add_argument("--model", default=DEFAULT_MODEL)
    parser.add_argument("--variant", default=DEFAULT_VARIANT, choices=sorted(VARIANTS))
    parser.add_argument("--api-key", default=None, help="defaults to OPENAI_API_KEY / the stored key")
    parser.add_argument("--out-dir", default="outputs")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(LOG_LEVEL)

    api_key = args.api_key or get_api_key() or load_api_key()
    if not api_key:
        print("No API key: pass --api-key or set OPENAI_API_KEY.")
        return 2

    files = load_files(args.files)
    session = SessionConfig(api_key=api_key, model=args.model, variant=args.variant, base_url=OPENAI_BASE_URL)

    print(f"\nFiles: {len(files)}  Model: {session.model}  Variant: {session.variant}")

    def on_progress(pct: float):
        print(f"\rProgress: {pct:5.1f}%", end="", flush=True)

    records = process_files(files, session, on_progress=on_progress)
    print()

    if args.api_key and is_well_formed_credential(args.api_key):
        save_api_key(args.api_key)

    if not records:
        print("No results were generated from the files.")
        return 1

    csv_path = write_text(os.path.join(args.out_dir, csv_filename()), records_to_csv(records, session.variant))
    json_path = os.path.join(args.out_dir, "slide_analysis.json")
    write_json(json_path, [r.to_dict() for r in records])

    #print summary
    print("\n===== SLIDE ANALYSIS =====")
    for _, name, items in group_by_file(records):
        print(f"\n{name}")
        for r in items:
            flag = " [error]" if r.error else ""
            print(f"  p.{r.page_number}: {r.title}{flag}")

    print("\nStats:", batch_stats(records))
    print(f"CSV saved to: {csv_path}")
    print(f"JSON saved to: {json_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
