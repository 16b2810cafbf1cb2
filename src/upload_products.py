#!/usr/bin/env python3
"""Build a Shopify product import CSV from assets/products.xlsx and assets/images.

Image urls in the CSV point at a public tunnel to a local static server, so
keep this process alive until Shopify has finished the import. Run
``http-server`` + ``ngrok`` yourself and set NGROK_URL / NGROK_PREFIX to reuse
a persistent url instead.
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from product_upload.errors import ValidationError
from product_upload.transform import GenerateResult, generate_csv, output_filename
from server.publish import Publisher
from server.settings import Settings, load_settings


log = logging.getLogger("upload_products")


def parse_args(settings: Settings, argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Convert the products workbook and images to a Shopify import CSV")
    p.add_argument("--env-file", default="", help="Path to .env file (optional)")
    p.add_argument("--products-file", default=str(settings.products_file), help="Products workbook (or set PRODUCTS_FILE)")
    p.add_argument("--images-dir", default=str(settings.images_dir), help="Folder with one sub-folder of images per SKU (or set IMAGES_DIR)")
    p.add_argument("--output-dir", default=str(settings.output_dir), help="Where the import CSV is written (or set OUTPUT_DIR)")
    p.add_argument("--skus", default=settings.skus_to_include, help="Comma separated SKUs for a partial import (or set SKUS_TO_INCLUDE)")
    p.add_argument("--skip-images", action="store_true", default=settings.skip_image_upload, help="Only upload/update product details (or set SKIP_IMAGE_UPLOAD=true)")
    p.add_argument("--port", type=int, default=settings.server_port, help="Static file server port (default: 8080, or set SERVER_PORT)")
    p.add_argument("--public-url", default=settings.ngrok_url, help="Existing public url serving the images folder (or set NGROK_URL)")
    p.add_argument("--generate-only", action="store_true", help="Write the CSV and exit without starting the server or a tunnel")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v for DEBUG)")
    return p.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    return settings.model_copy(
        update={
            "products_file": Path(args.products_file),
            "images_dir": Path(args.images_dir),
            "output_dir": Path(args.output_dir),
            "skus_to_include": args.skus or "",
            "skip_image_upload": bool(args.skip_images),
            "server_port": args.port,
            "ngrok_url": args.public_url or "",
        }
    )


def setup_logging(level_name: str, verbose: int = 0) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")


def completion_message(result: GenerateResult, settings: Settings, created_tunnel: bool) -> str:
    lines = [
        f"\nGenerated {result.output_path}",
        f"\nYou may now proceed to https://{settings.shop_name}.myshopify.com/admin/products "
        f"to select '{result.output_path.name}' for import",
    ]
    if created_tunnel:
        lines.append("\n Note: Keep this process alive until the import has succeeded in Shopify")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    env_only = argparse.ArgumentParser(add_help=False)
    env_only.add_argument("--env-file", default="")
    early_args, _ = env_only.parse_known_args(argv)

    settings = load_settings(early_args.env_file or None)
    args = parse_args(settings, argv)
    settings = apply_args(settings, args)
    setup_logging(settings.log_level, args.verbose)

    options = settings.transform_options()
    output_path = settings.output_dir / output_filename(options.is_partial, datetime.now())

    def generate(base_url: str) -> GenerateResult:
        return generate_csv(settings.products_file, settings.images_dir, output_path, base_url, options)

    def report(result: GenerateResult, created_tunnel: bool) -> None:
        print(completion_message(result, settings, created_tunnel))

    if args.generate_only:
        base_url = settings.public_url
        if not base_url:
            log.error("--generate-only needs --public-url, NGROK_URL or NGROK_PREFIX")
            return 2
        report(generate(base_url), False)
        return 0

    publisher = Publisher(settings, generate)
    try:
        asyncio.run(publisher.run(report))
    except KeyboardInterrupt:
        log.info("Stopped")
    return 0


def run() -> None:
    try:
        code = main()
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 2
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    run()
