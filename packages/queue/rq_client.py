"""RQ 기반 큐 헬퍼."""
from __future__ import annotations

import os
from typing import Any, Iterable

import redis
from rq import Queue, Worker
from rq.job import Job


def get_redis_connection() -> redis.Redis:
    url = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    return redis.from_url(url)


def get_queue(name: str = "default") -> Queue:
    return Queue(name, connection=get_redis_connection())


def enqueue(job_path: str, *args: Any, queue_name: str = "default", **kwargs: Any) -> Job:
    # 경로만 넘겨 API 프로세스가 워커 쪽 모듈을 임포트하지 않게 한다
    q = get_queue(queue_name)
    return q.enqueue(job_path, *args, **kwargs)


def start_worker(queue_names: Iterable[str] = ("default",)) -> None:
    conn = get_redis_connection()
    worker = Worker([Queue(name, connection=conn) for name in queue_names], connection=conn)
    worker.work()
