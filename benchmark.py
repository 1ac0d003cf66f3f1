# Command line speed test against the stored settings and model catalog

import sys

from omni_console.benchmark import BenchmarkRunner
from omni_console.shared.config import Config
from omni_console.shared.logging import LoggingManager


if __name__ == "__main__":
    # --load-only re-renders the graph from the last saved CSV
    run_tests = True
    if len(sys.argv) > 1:
        if sys.argv[1].lower() in ['--no-tests', '--load-only', 'load']:
            run_tests = False

    config = Config()
    LoggingManager.setup_logging(config.log_level, config.library_log_levels)
    runner = BenchmarkRunner(config, run_tests=run_tests)
    runner.run()
