#!/usr/bin/env python
# License: BSD 3 clause
"""
Convert ARFF files to other ARFF layouts or to tabular formats, and tabular
files back to ARFF. Formats are determined from the file extensions.
"""

import argparse
import logging
import os
import sys

import numpy as np
import pandas as pd

from arfftools.data.attributes import ArffHeader, RelationalType
from arfftools.data.conversion import dataframe_to_arff, instances_to_dataframe
from arfftools.data.errors import ArffError
from arfftools.data.readers import ArffReader
from arfftools.data.writers import ArffWriter
from arfftools.utils.constants import (
    ARFF_EXTENSION,
    DEFAULT_WRITE_ENCODING,
    EXT_TO_DELIMITER,
    JSONLINES_EXTENSIONS,
)
from arfftools.utils.logging import close_and_remove_logger_handlers, get_arff_logger
from arfftools.version import __version__

TABULAR_EXTENSIONS = set(EXT_TO_DELIMITER) | JSONLINES_EXTENSIONS


def _read_arff_file(path, encoding, logger):
    """Return the header, the instances and the weights of an ARFF file."""
    instances = []
    weights = []
    with ArffReader(path, encoding=encoding, logger=logger) as reader:
        header = reader.read_header()
        while True:
            weighted_instance = reader.read_instance()
            if weighted_instance is None:
                break
            instances.append(weighted_instance[0])
            weights.append(weighted_instance[1])
    logger.info(f"Read {len(instances)} instances of relation '{header.relation_name}' "
                f"from {path}.")
    return header, instances, weights


def _read_table(path, extension, encoding):
    if extension in JSONLINES_EXTENSIONS:
        return pd.read_json(path, orient="records", lines=True, encoding=encoding)
    return pd.read_csv(path, sep=EXT_TO_DELIMITER[extension], encoding=encoding)


def _write_table(df, path, extension, encoding):
    if extension in JSONLINES_EXTENSIONS:
        df.to_json(path, orient="records", lines=True, date_format="iso",
                   force_ascii=False)
    else:
        df.to_csv(path, sep=EXT_TO_DELIMITER[extension], index=False, encoding=encoding)


def main(argv=None):
    """
    Handles command line arguments and gets things started.

    Parameters
    ----------
    argv : list of str
        List of arguments, as if specified on the command-line.
        If None, ``sys.argv[1:]`` is used instead.
    """
    # Get command line arguments
    parser = argparse.ArgumentParser(
        description="Takes an ARFF file and rewrites it as ARFF or converts it "
                    "to CSV, TSV or JSON lines, or takes a CSV, TSV or JSON "
                    "lines file and converts it to ARFF. Formats are "
                    "determined automatically from file extensions.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('infile',
                        help='input file (ends in .arff, .csv, .jsonlines, '
                             '.ndj, or .tsv)')
    parser.add_argument('outfile',
                        help='output file (ends in .arff, .csv, .jsonlines, '
                             '.ndj, or .tsv); one of the two files must be '
                             'an ARFF file')
    parser.add_argument('-r', '--relation',
                        help='Relation name to use for the output ARFF file. '
                             'Defaults to the relation name of the input ARFF '
                             'file, or to the input file name.',
                        default=None)
    parser.add_argument('-s', '--sparse',
                        help='Write the instances of the output ARFF file in '
                             'the sparse layout.',
                        action='store_true')
    parser.add_argument('-n', '--nominal',
                        help='A column of the input table to convert to a '
                             'nominal attribute instead of a string or numeric '
                             'one.',
                        nargs='*',
                        default=[])
    parser.add_argument('-w', '--weight_col',
                        help='Name of the column holding instance weights. '
                             'When converting a table to ARFF, weights are '
                             'only read if this is given.',
                        default=None)
    parser.add_argument('-e', '--encoding',
                        help='Character encoding of the input file; use '
                             '"detect" to guess it.',
                        default='utf-8-sig')
    parser.add_argument('--log_file',
                        help='Also write log messages to this file.',
                        default=None)
    parser.add_argument('-q', '--quiet',
                        help='Suppress printing of "Reading..." messages.',
                        action='store_true')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)

    # Make warnings from built-in warnings module get formatted more nicely
    logging.captureWarnings(True)
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - '
                               '%(message)s')
    logger = get_arff_logger(__name__,
                             filepath=args.log_file,
                             log_level=logging.WARNING if args.quiet else logging.INFO)

    input_extension = os.path.splitext(args.infile)[1].lower()
    output_extension = os.path.splitext(args.outfile)[1].lower()
    valid_extensions = TABULAR_EXTENSIONS | {ARFF_EXTENSION}

    for extension in (input_extension, output_extension):
        if extension not in valid_extensions:
            logger.error('Files must be in either .arff, .csv, .jsonlines, '
                         f'.ndj, or .tsv format. You specified: {extension}')
            sys.exit(1)

    if ARFF_EXTENSION not in (input_extension, output_extension):
        logger.error('Either the input or the output file must be an ARFF '
                     'file. Use pandas to convert between tabular formats.')
        sys.exit(1)

    read_encoding = None if args.encoding == 'detect' else args.encoding

    started_arff_output = False
    try:
        if input_extension == ARFF_EXTENSION:
            header, instances, weights = _read_arff_file(args.infile, read_encoding, logger)
        else:
            df = _read_table(args.infile, input_extension, read_encoding)
            weights = [None] * len(df)
            if args.weight_col is not None:
                if args.weight_col not in df.columns:
                    logger.error(f"Weight column '{args.weight_col}' does not exist in "
                                 f"{args.infile}.")
                    sys.exit(1)
                weights = [None if np.isnan(weight) else weight
                           for weight in df.pop(args.weight_col).astype(float).tolist()]
            for column in args.nominal:
                if column not in df.columns:
                    logger.error(f"Column '{column}' does not exist in {args.infile}.")
                    sys.exit(1)
                df[column] = df[column].astype('category')
            relation_name = os.path.splitext(os.path.basename(args.infile))[0]
            header, instances = dataframe_to_arff(df, relation_name)
            logger.info(f"Read {len(instances)} rows with {len(header)} columns from "
                        f"{args.infile}.")

        if output_extension == ARFF_EXTENSION:
            if args.relation is not None:
                header = ArffHeader(args.relation, header.attributes)
            started_arff_output = True
            with ArffWriter(args.outfile, encoding=DEFAULT_WRITE_ENCODING,
                            logger=logger) as writer:
                writer.write_header(header)
                for instance, weight in zip(instances, weights):
                    writer.write_instance(instance, sparse=args.sparse, weight=weight)
        else:
            relational = [attribute.name for attribute in header.attributes
                          if isinstance(attribute.type, RelationalType)]
            if relational:
                logger.error('Relational attributes cannot be written to '
                             f'{output_extension} files: {", ".join(relational)}')
                sys.exit(1)
            has_weights = any(weight is not None for weight in weights)
            df = instances_to_dataframe(header,
                                        instances,
                                        weights=weights if has_weights else None,
                                        weight_col=args.weight_col or 'weight')
            _write_table(df, args.outfile, output_extension, DEFAULT_WRITE_ENCODING)
    except (ArffError, ValueError, TypeError) as exc:
        logger.error(str(exc))
        # do not leave a truncated ARFF file behind
        if started_arff_output and os.path.exists(args.outfile):
            os.remove(args.outfile)
        sys.exit(1)

    logger.info(f"Wrote {len(instances)} instances to {args.outfile}.")
    close_and_remove_logger_handlers(logger)


if __name__ == '__main__':
    main()
