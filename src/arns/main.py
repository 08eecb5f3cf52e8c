"""
Main module for the arns command line tool.
"""
import argparse
import json
import sys

import yaml

from .common import Common
from .resource import BlankResourceError, parse_resource
from .version import VERSION


def read_jq_inputs(stmt, stream):
    """
    Runs a JQ statement over a JSON document and returns every value it yields.

    Parameters
    ----------
    stmt : str
        The JQ statement to run.
    stream : io.TextIOBase
        The stream containing the JSON document.

    Returns
    -------
    list
        The values produced by the statement.
    """
    return Common.jq(stmt).input_text(stream.read()).all()


def parse_inputs(raw_inputs):
    """
    Parses each input as an ARN resource section, logging the outcome of each.

    Parameters
    ----------
    raw_inputs : list
        The inputs to parse. Non-string inputs are rejected.

    Returns
    -------
    tuple(list(arns.resource.ArnResource), int)
        The successfully parsed resources and the number of failed inputs.
    """
    parsed = []
    failures = 0
    for raw in raw_inputs:
        if not isinstance(raw, str):
            Common.error(
                f"Expected a string, got {type(raw).__name__}: {raw!r}",
                "Not a string",
                "resource",
                subcategory="parse",
            )
            Common.info(f"Skipping non-string value {raw!r}")
            failures += 1
            continue
        try:
            resource = parse_resource(raw)
        except BlankResourceError as error:
            Common.log_exception(error, "resource", subcategory="parse", resource=raw)
            Common.info(f"Failed to parse {raw!r}: {str(error)}")
            failures += 1
            continue
        Common.log(
            f"Parsed resource {raw}",
            "Parsed resource",
            "resource",
            "success",
            subcategory="parse",
            resource=raw,
        )
        parsed.append(resource)
    return parsed, failures


def format_resources(resources, output_format):
    """
    Formats parsed resources for output.

    Parameters
    ----------
    resources : list(arns.resource.ArnResource)
        The resources to format.
    output_format : str
        One of "yaml", "json" or "text".

    Returns
    -------
    str
        The formatted output.
    """
    if output_format == "text":
        placeholder = Common.placeholder()
        return "\n".join(resource.render(placeholder) for resource in resources)
    data = [resource.to_dict() for resource in resources]
    if output_format == "json":
        return json.dumps(data, indent=2)
    return yaml.dump(data, sort_keys=False).rstrip("\n")


def main(argv=None):
    """
    Entrypoint for arns.
    """
    parser = argparse.ArgumentParser(
        prog="arns",
        description="Splits the resource section of ARNs into resource type, resource and qualifier",
    )
    parser.add_argument("resources", nargs="*", metavar="resource")
    parser.add_argument(
        "--jq",
        dest="jq",
        default=None,
        help="read a JSON document from stdin and parse every value this JQ statement yields",
    )
    parser.add_argument(
        "--format", choices=("yaml", "json", "text"), default="yaml", dest="output_format"
    )
    parser.add_argument("--config", default=None, help="configuration directory")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    args = parser.parse_args(argv)

    Common.initialize(args.config)

    raw_inputs = list(args.resources)
    if args.jq is not None:
        try:
            raw_inputs.extend(read_jq_inputs(args.jq, sys.stdin))
        except ValueError as error:
            Common.log_exception(error, "resource", subcategory="jq")
            Common.info(f"Failed to evaluate JQ statement {args.jq!r}: {str(error)}")
            return 1
    if not raw_inputs:
        parser.print_usage(sys.stderr)
        Common.info("arns: error: no resources given")
        return 2

    with Common.deferred_logging():
        resources, failures = parse_inputs(raw_inputs)
    if resources:
        print(format_resources(resources, args.output_format))
    return 1 if failures else 0
