"""인덱싱 워커 엔트리포인트.

사용 예시:
    python -m apps.worker.main worker
    python -m apps.worker.main run index_document <document_id>
"""
import asyncio
import logging
import sys
from argparse import ArgumentParser, Namespace

from apps.worker.src.jobs import resume_document
from packages.indexing.src.config import INDEXING_QUEUE_NAME

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("worker")


JOB_MAP = {
    "index_document": resume_document,
}


def parse_args(argv: list[str]) -> Namespace:
    parser = ArgumentParser(prog="detail-search-worker")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("worker", help=f"RQ 워커 실행 (queue={INDEXING_QUEUE_NAME})")

    run = sub.add_parser("run", help="단일 잡 실행")
    run.add_argument("job", choices=JOB_MAP.keys())
    run.add_argument("document_id")

    return parser.parse_args(argv)


async def run_job(name: str, document_id: str) -> int:
    job = JOB_MAP[name]
    logger.info("starting job '%s' document=%s", name, document_id)
    report = await job(document_id)
    if report is None:
        return 1
    logger.info("finished job '%s' indexed=%d errors=%d", name, report.indexed, report.errors)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)

    if args.command == "worker":
        from packages.queue.rq_client import start_worker

        start_worker([INDEXING_QUEUE_NAME])
        return 0
    return asyncio.run(run_job(args.job, args.document_id))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
