#!/usr/bin/env python
# License: BSD 3 clause
"""
Print the header of an ARFF file along with a summary of its data section.
"""

import argparse
import logging
import sys

from arfftools.data.errors import ArffError
from arfftools.data.readers import ArffReader
from arfftools.data.writers import ArffWriter
from arfftools.version import __version__


def main(argv=None):
    """
    Handles command line arguments and gets things started.

    Parameters
    ----------
    argv : list of str
        List of arguments, as if specified on the command-line.
        If None, ``sys.argv[1:]`` is used instead.
    """
    parser = argparse.ArgumentParser(
        description="Prints the relation name and attribute declarations of "
                    "an ARFF file, followed by the number of instances and "
                    "their total weight as comments.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('infile', help='ARFF file to summarize')
    parser.add_argument('--header_only',
                        help='Do not read the data section.',
                        action='store_true')
    parser.add_argument('-e', '--encoding',
                        help='Character encoding of the input file; use '
                             '"detect" to guess it.',
                        default='utf-8-sig')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)

    # Make warnings from built-in warnings module get formatted more nicely
    logging.captureWarnings(True)
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - '
                               '%(message)s')
    logger = logging.getLogger(__name__)

    encoding = None if args.encoding == 'detect' else args.encoding
    try:
        with ArffReader(args.infile, encoding=encoding, logger=logger) as reader:
            header = reader.read_header()
            num_instances = 0
            total_weight = 0.0
            if not args.header_only:
                while True:
                    weighted_instance = reader.read_instance()
                    if weighted_instance is None:
                        break
                    num_instances += 1
                    weight = weighted_instance[1]
                    total_weight += 1.0 if weight is None else weight
    except ArffError as exc:
        logger.error(f"{args.infile}: {exc}")
        sys.exit(1)

    with ArffWriter(sys.stdout, logger=logger) as writer:
        writer.write_header(header)
        if not args.header_only:
            writer.write_comment(f"instances: {num_instances}\n"
                                 f"total weight: {total_weight:g}")


if __name__ == '__main__':
    main()
