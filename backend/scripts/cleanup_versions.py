"""Version retention job: purge expired edit locks and old content versions.

Meant to be run by an external scheduler (cron, k8s CronJob).

Usage:
  python scripts/cleanup_versions.py                  # dry-run, report only
  python scripts/cleanup_versions.py --apply          # delete
  python scripts/cleanup_versions.py --apply --keep 20
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func

from storyslip.config import settings
from storyslip.database import SessionLocal
from storyslip.models.content_lock import ContentLock
from storyslip.models.content_version import ContentVersion
from storyslip.services import lock_service, version_service
from storyslip.utils.helpers import utc_now


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Actually delete rows")
    parser.add_argument("--keep", type=int, default=settings.VERSION_RETENTION, help="Versions to keep per content")
    args = parser.parse_args()
    if args.keep < 1:
        parser.error("--keep must be at least 1")

    db = SessionLocal()
    try:
        if args.apply:
            expired = lock_service.purge_expired_locks(db)
            deleted = version_service.cleanup_versions(db, args.keep)
        else:
            expired = db.query(ContentLock).filter(ContentLock.expires_at <= utc_now()).count()
            counts = (
                db.query(func.count(ContentVersion.version_id))
                .group_by(ContentVersion.content_id)
                .all()
            )
            deleted = sum(max(0, int(row[0]) - args.keep) for row in counts)
    finally:
        db.close()

    print("Content version cleanup result")
    print(f"  dry_run: {not args.apply}")
    print(f"  keep_versions: {args.keep}")
    print(f"  expired_locks: {expired}")
    print(f"  old_versions: {deleted}")


if __name__ == "__main__":
    main()
