# src/technofest/scripts/dump_images.py
"""Write stored registration documents to disk for inspection.

Usage:
    python -m technofest.scripts.dump_images 8 9 --out uploads/
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sqlalchemy.orm import Session

from technofest.db.session import SessionLocal
from technofest.services.errors import RegistrationNotFound
from technofest.services.registration import IMAGE_COLUMNS, load_image


def dump_images(db: Session, ids: list[int], out_dir: Path) -> list[Path]:
    """Write every stored document of *ids* into *out_dir*; return the paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for registration_id in ids:
        for kind in IMAGE_COLUMNS:
            try:
                data = load_image(db, registration_id, kind)
            except RegistrationNotFound:
                print(f"ID {registration_id} not found")
                break
            if not data:
                continue
            path = out_dir / f"{kind}-{registration_id}.bin"
            path.write_bytes(data)
            written.append(path)
            print(f"Wrote {kind} for {registration_id} -> {path} ({len(data)} bytes)")
    return written


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump stored registration images")
    parser.add_argument("ids", type=int, nargs="+", help="Registration ids")
    parser.add_argument("--out", type=Path, default=Path("uploads"), help="Output directory")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        dump_images(db, args.ids, args.out)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
