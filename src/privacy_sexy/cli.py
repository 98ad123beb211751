from __future__ import annotations

import argparse
import os
import sys
from typing import NoReturn, Optional, Sequence

from privacy_sexy.core.errors import CollectionReadError, ParseError, ScriptRunError
from privacy_sexy.core.models import OS, Collection, Recommend
from privacy_sexy.core.report import ResolutionReport
from privacy_sexy.io.collection_loader import get_collection, load_collection_from_file
from privacy_sexy.logging.helpers import configure_logging, get_logger
from privacy_sexy.net.collection_fetcher import fetch_collection, fetch_os_collection
from privacy_sexy.parsing.parser import _build_parser
from privacy_sexy.runtime.config import build_resolver_config
from privacy_sexy.runtime.execution import run_script

logger = get_logger('cli')


def _load(ns: argparse.Namespace) -> Collection:
    target = OS.from_str(ns.os) if ns.os else None
    if ns.file:
        return load_collection_from_file(ns.file)
    if ns.url:
        return fetch_collection(ns.url)
    if ns.remote:
        return fetch_os_collection(target or OS.system())
    return get_collection(target or OS.system())


class PrivacySexy:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str]) -> int:
        """Run the tool with an argv-like sequence and return the exit status."""
        ns = _build_parser().parse_args(list(argv))
        configure_logging(json_logs=ns.json_logs or os.getenv('PRIVACY_SEXY_JSON_LOGS') == '1')

        collection = _load(ns)
        recommend: Optional[Recommend] = Recommend.from_str(ns.recommend) if ns.recommend else None
        report = ResolutionReport() if ns.report else None

        script = collection.parse(
            ns.names,
            ns.revert,
            recommend,
            config=build_resolver_config(logger=get_logger('resolve')),
            report=report,
        )
        if report is not None:
            print(report.to_json(), file=sys.stderr)

        if ns.command == 'echo':
            sys.stdout.write(script)
            if not script.endswith('\n'):
                sys.stdout.write('\n')
            return 0
        return run_script(script, collection.scripting.file_extension, logger=logger)


def main() -> NoReturn:
    """Entry point for the `privacy-sexy` console script."""
    try:
        raise SystemExit(PrivacySexy.run(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except (ParseError, CollectionReadError, ScriptRunError) as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('%s: %s', type(exc).__name__, exc)
        raise SystemExit(1)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
