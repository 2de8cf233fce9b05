"""Command line front end for one generation batch.

Run with: fluxstudio "a lighthouse at dusk" --style photorealistic --output-dir out/
"""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from fluxstudio.client import SLOT_COUNT, Studio, StudioClient, StudioState
from fluxstudio.core.options import DEFAULT_SIZE, DEFAULT_STYLE, ImageSize, Style
from fluxstudio.core.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fluxstudio",
        description=f"Generate {SLOT_COUNT} images for a prompt through a running Flux Studio server.",
    )
    parser.add_argument("prompt", help="Text prompt")
    parser.add_argument(
        "--style",
        default=DEFAULT_STYLE.value,
        choices=[s.value for s in Style if s is not Style.generic],
    )
    parser.add_argument(
        "--size",
        default=DEFAULT_SIZE.value,
        choices=[s.value for s in ImageSize],
    )
    parser.add_argument("--server", default=None, help="Server URL (default: $FLUXSTUDIO_URL)")
    parser.add_argument("--output-dir", default=None, help="Download generated images here")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


async def run(args: argparse.Namespace) -> int:
    client = StudioClient(args.server or get_settings().server_url)
    studio = Studio(client, StudioState(prompt=args.prompt, style=args.style, size=args.size))
    try:
        await studio.generate()

        for slot in studio.state.slots:
            if slot.result is not None:
                line = f"[{slot.index + 1}] {slot.result.url} ({slot.result.width}x{slot.result.height})"
                if args.output_dir:
                    path = await studio.download_image(slot.index, args.output_dir)
                    if path is not None:
                        line += f" -> {path}"
                print(line)
            else:
                print(f"[{slot.index + 1}] {slot.error or 'No image'}, try again")
    finally:
        await client.close()

    if studio.state.error:
        print(studio.state.error, file=sys.stderr)
        return 1
    return 0


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    if not args.prompt.strip():
        print("Prompt is required", file=sys.stderr)
        return 2
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
