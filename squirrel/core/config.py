"""Run configuration and command-line parsing."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

HEADLESS_BROWSER_DEFAULT = True
TEMP_DIR_DEFAULT = "temp/"
WAIT_SCALE_FACTOR_DEFAULT = 1.0
LOG_LEVEL_DEFAULT = "INFO"

# Log indentation per recursion level
TAB_SIZE = 4


@dataclass
class Config:
    workflow_file_path: str
    headless_browser: bool = HEADLESS_BROWSER_DEFAULT
    browser_endpoint: str | None = None  # CDP URL of a remote browser
    temp_dir: str = TEMP_DIR_DEFAULT
    wait_scale_factor: float = WAIT_SCALE_FACTOR_DEFAULT
    window_size: tuple[int, int] | None = None
    element_loop_limit: int | None = None  # None: unbounded
    log_level: str = LOG_LEVEL_DEFAULT

    @property
    def is_remote(self) -> bool:
        return self.browser_endpoint is not None

    @property
    def scales_waits(self) -> bool:
        """Waits are scaled when nobody is watching the browser."""
        return self.headless_browser or self.is_remote


def _parse_bool(value: str | None) -> bool:
    if value is None:
        return HEADLESS_BROWSER_DEFAULT
    text = value.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return HEADLESS_BROWSER_DEFAULT


def _parse_window_size(value: str) -> tuple[int, int]:
    try:
        width, height = value.lower().split("x", 1)
        size = (int(width), int(height))
    except ValueError:
        raise argparse.ArgumentTypeError(f"window size must look like 1280x800, got {value!r}")
    if size[0] <= 0 or size[1] <= 0:
        raise argparse.ArgumentTypeError(f"window size must be positive, got {value!r}")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="squirrel",
        description="Replay a YAML browser workflow against a Chromium session.",
    )
    parser.add_argument("workflow_file_path", help="Workflow definition (.yaml) to execute.")
    parser.add_argument(
        "headless",
        nargs="?",
        default=None,
        help="Run the browser headless: true/false (default: true).",
    )
    parser.add_argument("--endpoint", default=None, help="CDP URL of an already running browser.")
    parser.add_argument("--temp-dir", default=TEMP_DIR_DEFAULT, help="Directory for screenshots.")
    parser.add_argument(
        "--wait-scale",
        type=float,
        default=WAIT_SCALE_FACTOR_DEFAULT,
        help="Multiplier for PageWait durations in headless or remote runs.",
    )
    parser.add_argument("--window-size", type=_parse_window_size, default=None, help="e.g. 1280x800")
    parser.add_argument(
        "--element-loop-limit",
        type=int,
        default=None,
        help="Abort an ElementsLoopThrough after this many iterations.",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL_DEFAULT, help="Logging level name.")
    return parser


def parse_args(argv: list[str] | None = None) -> Config:
    """Parse command-line arguments (without the program name) into a Config."""
    args = build_parser().parse_args(argv)
    return Config(
        workflow_file_path=args.workflow_file_path,
        headless_browser=_parse_bool(args.headless),
        browser_endpoint=args.endpoint,
        temp_dir=args.temp_dir,
        wait_scale_factor=args.wait_scale,
        window_size=args.window_size,
        element_loop_limit=args.element_loop_limit,
        log_level=args.log_level.upper(),
    )


def launch_args(config: Config) -> list[str]:
    """Chromium command-line switches for a locally launched browser."""
    args: list[str] = []
    if config.headless_browser:
        args.extend(["--headless", "--no-sandbox", "--disable-dev-shm-usage"])
    return args
