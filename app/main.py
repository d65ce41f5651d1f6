"""
main.py: Application entry point.

Headless demo of the cursor pipeline:

    QTimer tick → CursorHost → CursorController → AnimationRegistry
             → completions → Qt signals → log

Activates one dwell action on the primary slot and logs every outbound
event until the run time elapses.
"""
from __future__ import annotations
import argparse
import dataclasses
import logging
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from app.config import CursorConfig, default_config
from app.qt_host import CursorHost
from core.cursor_controller import CursorController
from domain.enums import SlotId
from domain.models import ActionDescriptor

logger = logging.getLogger(__name__)


def run(config: CursorConfig = default_config, delay_ms: float = 600, run_ms: int = 1500) -> int:
    logger.info("=" * 55)
    logger.info("  RETICLE CURSOR: demo run")
    logger.info("=" * 55)
    logger.info("  Mode     : %s", "gaze dwell" if config.touch_capable else "direct click")
    logger.info("  Dwell    : %.0fms", delay_ms)
    logger.info("  Tick     : %dms", config.tick_interval_ms)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    controller = CursorController(config)
    host = CursorHost(controller, config)
    host.title_changed.connect(
        lambda slot, title: logger.info("[EVENT] %s-title → %r", slot, title)
    )
    host.clicked.connect(lambda slot: logger.info("[EVENT] %s-click", slot))

    controller.activate([
        ActionDescriptor(
            name=SlotId.PRIMARY,
            title="Select",
            icon="select-icon",
            delay_ms=delay_ms,
            triggers_click=True,
            callback=lambda: logger.info("[EVENT] primary callback"),
        ),
    ])

    host.start()
    QTimer.singleShot(run_ms, app.quit)
    try:
        return app.exec()
    finally:
        host.stop()
        logger.info("✓ Cursor demo finished")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reticle cursor demo")
    parser.add_argument("--click-mode", action="store_true",
                        help="start in direct-click mode instead of gaze dwell")
    parser.add_argument("--delay", type=float, default=600, help="dwell time in ms")
    parser.add_argument("--run-ms", type=int, default=1500, help="demo length in ms")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    config = dataclasses.replace(default_config, touch_capable=not args.click_mode)
    return run(config, delay_ms=args.delay, run_ms=args.run_ms)


if __name__ == "__main__":
    sys.exit(main())
