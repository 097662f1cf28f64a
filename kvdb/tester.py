"""Integration tester for a kvdb REST server.

Run against a clean, empty server::

    $ kvdb-tester --endpoint http://127.0.0.1:8080
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://127.0.0.1:8080"
BASE_URI = "/api"
DEFAULT_DBS = ("db1", "db2")


class ScenarioFailed(Exception):
    """Raised when a server response does not match the REST contract.

    Attributes:
        step: Human-readable name of the failing step.
    """

    def __init__(self, step: str, expected: object, actual: object) -> None:
        self.step = step
        self.expected = expected
        self.actual = actual
        super().__init__(f"{step}: expected {expected!r}, got {actual!r}")


class RestClient:
    """Thin client for ``{METHOD} /api/{db_id}/{key}``.

    Mirrors the ``Db`` surface: ``get`` returns ``None`` on 404 and
    ``delete`` returns ``False`` on 404. Error statuses raise
    ``httpx.HTTPStatusError``; any other status besides 200 raises
    ``ScenarioFailed``.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=endpoint.rstrip("/") + BASE_URI,
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _path(db_id: str, key: str) -> str:
        return f"/{quote(db_id, safe='')}/{quote(key, safe='')}"

    def get(self, db_id: str, key: str) -> str | None:
        resp = self._client.get(self._path(db_id, key))
        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        resp.raise_for_status()
        if resp.status_code != httpx.codes.OK:
            raise ScenarioFailed(f"GET {db_id}/{key}", 200, resp.status_code)
        return resp.text

    def put(self, db_id: str, key: str, value: str) -> bool:
        resp = self._client.put(self._path(db_id, key), content=value.encode("utf-8"))
        resp.raise_for_status()
        if resp.status_code != httpx.codes.OK:
            raise ScenarioFailed(f"PUT {db_id}/{key}", 200, resp.status_code)
        return True

    def delete(self, db_id: str, key: str) -> bool:
        resp = self._client.delete(self._path(db_id, key))
        if resp.status_code == httpx.codes.NOT_FOUND:
            return False
        resp.raise_for_status()
        if resp.status_code != httpx.codes.OK:
            raise ScenarioFailed(f"DELETE {db_id}/{key}", 200, resp.status_code)
        return True

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _check(step: str, expected: object, actual: object) -> None:
    if actual != expected:
        raise ScenarioFailed(step, expected, actual)
    logger.debug("ok: %s", step)


def post_get_put_get(client: RestClient, db_id: str, key: str = "1") -> None:
    """Run the get/put/delete round trip against one database."""
    test_value = f"helloworld {db_id}"

    _check(f"GET {db_id}/{key} before PUT", None, client.get(db_id, key))
    _check(f"DELETE {db_id}/{key} before PUT", False, client.delete(db_id, key))
    _check(f"PUT {db_id}/{key}", True, client.put(db_id, key, test_value))
    _check(f"GET {db_id}/{key} after PUT", test_value, client.get(db_id, key))
    _check(f"DELETE {db_id}/{key}", True, client.delete(db_id, key))
    _check(f"GET {db_id}/{key} after DELETE", None, client.get(db_id, key))
    _check(f"DELETE {db_id}/{key} again", False, client.delete(db_id, key))


def run(client: RestClient, db_ids: Sequence[str] = DEFAULT_DBS) -> None:
    """Run the round trip for every database id."""
    for db_id in db_ids:
        logger.info("Testing database %s", db_id)
        post_get_put_get(client, db_id)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kvdb-tester",
        description="Integration tester for a kvdb REST server (expects an empty server)",
    )
    parser.add_argument(
        "--endpoint",
        default=os.environ.get("KVDB_ENDPOINT", DEFAULT_ENDPOINT),
        help="Server base URL (default: %(default)s)",
    )
    parser.add_argument(
        "--db",
        dest="db_ids",
        action="append",
        help="Database id to exercise; repeatable (default: db1 db2)",
    )
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="Logging level (default: %(default)s)",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        with RestClient(args.endpoint, timeout=args.timeout) as client:
            run(client, args.db_ids or DEFAULT_DBS)
    except ScenarioFailed as error:
        logger.error("Integration testing failed: %s", error)
        return 1
    except httpx.HTTPError as error:
        logger.error("Request to %s failed: %s", args.endpoint, error)
        return 1

    print("Integration testing successful.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
