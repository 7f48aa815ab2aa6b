"""
Command line entry point for the sequential MapReduce engine.

    mrsequential examples/wordcount.py pg-*.txt
"""

import sys
import logging
import argparse
from functools import partial

from mrsequential.config import JobConfig, LOG_FORMAT
from mrsequential.errors import MapReduceError
from mrsequential.function_loader import FunctionLoader
from mrsequential.input_reader import read_inputs
from mrsequential.job_runner import JobRunner
from mrsequential.output_writer import OutputWriter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mrsequential",
        description="Run a map/reduce job over input files in a single process")
    parser.add_argument("job_module",
                        help="Python file or dotted module defining map_function and reduce_function")
    parser.add_argument("inputs", nargs="+", metavar="input",
                        help="Input files, mapped in the order given")
    parser.add_argument("--output", "-o", default=None,
                        help="Output file (default: $MR_OUTPUT_FILE or mr-out-0)")
    parser.add_argument("--encoding", default=None,
                        help="Text encoding of inputs and output (default: utf-8)")
    parser.add_argument("--log-level", default=None,
                        help="Log level name (default: $MR_LOG_LEVEL or INFO)")
    parser.add_argument("--verbose", "-v", action="store_const", const="DEBUG",
                        dest="verbosity", help="Shortcut for --log-level DEBUG")
    parser.add_argument("--quiet", "-q", action="store_const", const="WARNING",
                        dest="verbosity", help="Shortcut for --log-level WARNING")
    return parser


def run_job(config: JobConfig, job_module: str, inputs) -> int:
    """Load the transforms, run the job and report; returns the exit status."""
    try:
        transforms = FunctionLoader(job_module).load()
        runner = JobRunner(
            transforms,
            writer=OutputWriter(config.output_path, encoding=config.encoding),
            input_reader=partial(read_inputs, encoding=config.encoding),
        )
        result = runner.run(inputs)
    except MapReduceError as e:
        logger.error(f"Job failed: {e}")
        return 1

    logger.info(f"Job completed: {result.summary()}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = JobConfig.from_env().override(
            output_path=args.output,
            encoding=args.encoding,
            log_level=args.verbosity or args.log_level,
        )
        level = config.numeric_log_level()
    except MapReduceError as e:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    return run_job(config, args.job_module, args.inputs)


if __name__ == "__main__":
    sys.exit(main())
