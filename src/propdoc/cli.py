"""propdoc CLI — generate a brochure PDF or list the built-in templates.

    propdoc templates
    propdoc generate basic --title "Sunny Villa" --address "123 Lake Rd" -o villa.pdf
"""

import argparse
import asyncio
import sys
from pathlib import Path

from propdoc.config import settings
from propdoc.core.errors import DocumentPipelineError
from propdoc.core.types import ProjectData
from propdoc.observability.logging import setup_logging
from propdoc.observability.tracing import init_tracing


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="propdoc", description="Property brochure generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("templates", help="List built-in templates")

    gen = sub.add_parser("generate", help="Generate a brochure PDF")
    gen.add_argument("template_id")
    gen.add_argument("--title", required=True)
    gen.add_argument("--address", default="")
    gen.add_argument("--website", default="")
    gen.add_argument("--email", default="")
    gen.add_argument("--phone", default="")
    gen.add_argument("--price", default="")
    gen.add_argument("--broker-name", default="")
    gen.add_argument("--property-type", default="")
    gen.add_argument("--offer-type", default="")
    gen.add_argument("--date-available", default="")
    gen.add_argument("--broker-firm", default="")
    gen.add_argument("--broker-firm-address", default="")
    gen.add_argument("--description-large", default="")
    gen.add_argument("--description-extra-large", default="")
    gen.add_argument("-o", "--output", type=Path, default=None, help="Output path (default: <template>.pdf)")
    gen.add_argument("--paginate", action="store_true", help="Start new pages instead of overflowing")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    setup_logging(json_format=False, level="DEBUG" if args.verbose else "WARNING")
    init_tracing(settings.mlflow_tracking_uri, settings.mlflow_experiment_name)

    if args.command == "templates":
        _print_templates()
        return

    project = ProjectData(
        title=args.title,
        address=args.address,
        website=args.website,
        email=args.email,
        phone=args.phone,
        price=args.price,
        broker_name=args.broker_name,
        property_type=args.property_type,
        offer_type=args.offer_type,
        date_available=args.date_available,
        broker_firm=args.broker_firm,
        broker_firm_address=args.broker_firm_address,
        description_large=args.description_large,
        description_extra_large=args.description_extra_large,
    )
    output = args.output or Path(f"{args.template_id}.pdf")
    sys.exit(asyncio.run(_generate(args.template_id, project, output, args.paginate or None)))


def _print_templates() -> None:
    from propdoc.templates.registry import default_registry

    for template in default_registry.list():
        keys = ", ".join(p.key.value for p in template.placeholders)
        print(f"{template.id:<10} {template.name}")
        print(f"{'':<10} {template.description}")
        print(f"{'':<10} placeholders: {keys}")


async def _generate(template_id: str, project: ProjectData, output: Path, paginate: bool | None) -> int:
    from propdoc.pipeline.generate import generate_document

    try:
        document = await generate_document(template_id, project, paginate=paginate)
    except DocumentPipelineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output.write_bytes(document.content)

    print(f"Wrote {output} ({document.byte_length:,} bytes, {document.page_count} page(s))")
    print(f"Summary ({document.summary.source.value}): {document.summary.text}")
    for warning in document.warnings:
        detail = f" — {warning.detail}" if warning.detail else ""
        print(f"  warning [{warning.kind.value}] {warning.message}{detail}")
    return 0


if __name__ == "__main__":
    main()
