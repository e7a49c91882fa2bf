"""Rewrite every user's progress document into the canonical shape.

Folds legacy nested maps and history-only rows into the keyed map and
rebuilds the mastered/needs-review lists. Safe to re-run.
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from vocab_progress.db.session import get_db_context
from vocab_progress.services.progress import ProgressService


if __name__ == "__main__":  # pragma: no cover - CLI execution
    import argparse

    parser = argparse.ArgumentParser(description="Canonicalize stored progress documents")
    parser.add_argument("--dry-run", action="store_true", help="Report without writing")
    args = parser.parse_args()

    with get_db_context() as session:
        result = ProgressService(session).canonicalize_records(dry_run=args.dry_run)
    print(f"Checked {result['checked']} record(s), rewritten {result['rewritten']}")
