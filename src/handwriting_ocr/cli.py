"""Main CLI entry point."""

import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from handwriting_ocr.config import Config, PreprocessingConfig, Provider, parse_threshold
from handwriting_ocr.errors import PreprocessingError, RecognitionError
from handwriting_ocr.pdf import pdf_to_images
from handwriting_ocr.providers.anthropic import AnthropicProvider
from handwriting_ocr.providers.openai import OpenAIProvider
from handwriting_ocr.providers.tesseract import TesseractProvider
from handwriting_ocr.recognition import recognize_image

console = Console(stderr=True)
load_dotenv()

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".tif", ".tiff"}


@click.command()
@click.argument("input_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--provider", "-p",
    type=click.Choice(["tesseract", "anthropic", "openai"], case_sensitive=False),
    default="tesseract",
    show_default=True,
    help="OCR engine to use.",
)
@click.option(
    "--model", "-m",
    default=None,
    help="Model name override for the LLM engines.",
)
@click.option(
    "--language", "-l",
    default=None,
    help="Tesseract language code (default: $OCR_LANGUAGE or 'tam').",
)
@click.option(
    "--api-key",
    default=None,
    help="API key (overrides environment variable).",
)
@click.option(
    "--contrast",
    default=50.0,
    show_default=True,
    help="Contrast strength; 0 leaves contrast unchanged.",
)
@click.option(
    "--threshold",
    default="128",
    show_default=True,
    help="Binarization level in [0, 255], or 'auto' for Otsu's method.",
)
@click.option(
    "--preprocess/--no-preprocess",
    default=True,
    show_default=True,
    help="Apply grayscale, contrast, sharpen and binarize before recognition.",
)
@click.option(
    "--save-preprocessed",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the image sent to the engine to this PNG path (page number appended for PDFs).",
)
@click.option(
    "--dpi",
    default=150,
    show_default=True,
    help="DPI for PDF rendering.",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log each preprocessing stage.")
@click.version_option(package_name="handwriting-ocr")
def main(
    input_path, provider, model, language, api_key, contrast, threshold,
    preprocess, save_preprocessed, dpi, output, verbose,
):
    """Recognize handwritten text in an image or PDF.

    INPUT_PATH can be a .pdf or an image (.png, .jpg, .jpeg, .webp, .gif,
    .bmp, .tif, .tiff). Text is written to stdout unless --output is given.
    """
    _setup_logging(verbose)

    try:
        config = Config.from_env(
            provider=Provider(provider),
            model_override=model,
            api_key_override=api_key,
            language_override=language,
        )
        pre_config = PreprocessingConfig(
            contrast_strength=contrast,
            binarize_threshold=parse_threshold(threshold),
        )
        pre_config.validate()
    except (RuntimeError, PreprocessingError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    suffix = input_path.suffix.lower()

    if suffix == ".pdf":
        with console.status("[cyan]Converting PDF to images..."):
            images = pdf_to_images(input_path, dpi=dpi)
        console.print(f"[dim]{len(images)} page(s) extracted[/dim]")
    elif suffix in IMAGE_EXTENSIONS:
        images = [input_path.read_bytes()]
    else:
        console.print(f"[red]Unsupported file type:[/red] {suffix}")
        sys.exit(1)

    engine = _build_provider(config)

    texts = []
    confidences = []
    for page, image in enumerate(images, start=1):
        label = f" page {page}/{len(images)}" if len(images) > 1 else ""
        with console.status(f"[cyan]Recognizing{label} via {provider}...") as status:

            def on_progress(p, status=status, label=label):
                status.update(f"[cyan]{p.phase.capitalize()}{label} ({p.percent}%)...")

            try:
                outcome = recognize_image(
                    image,
                    engine,
                    config.language,
                    config=pre_config,
                    preprocess=preprocess,
                    on_progress=on_progress,
                )
            except (PreprocessingError, RecognitionError) as e:
                console.print(f"[red]Error:[/red] {e}")
                sys.exit(1)

        if save_preprocessed:
            target = _page_path(save_preprocessed, page, len(images))
            target.write_bytes(outcome.image)
            console.print(f"[dim]Preprocessed image written to {target}[/dim]")

        texts.append(outcome.recognition.text)
        if outcome.recognition.confidence is not None:
            confidences.append(outcome.recognition.confidence)

    result = "\n\n".join(texts)

    if confidences:
        console.print(f"[dim]Confidence: {sum(confidences) / len(confidences):.1f}%[/dim]")

    if output:
        output.write_text(result, encoding="utf-8")
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(result)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _page_path(path: Path, page: int, pages: int) -> Path:
    if pages == 1:
        return path
    return path.with_name(f"{path.stem}-{page}{path.suffix or '.png'}")


def _build_provider(config: Config):
    if config.provider == Provider.TESSERACT:
        return TesseractProvider(tesseract_cmd=config.tesseract_cmd)
    elif config.provider == Provider.ANTHROPIC:
        return AnthropicProvider(api_key=config.api_key, model=config.model)
    elif config.provider == Provider.OPENAI:
        return OpenAIProvider(api_key=config.api_key, model=config.model)
    else:
        raise ValueError(f"Unknown provider: {config.provider}")
