"""CLI for the normalization tool."""

import click
from pathlib import Path
from typing import Optional

from grid_normalize.config import load_config, NormalizeOptions
from grid_normalize.core.errors import NormalizeError


@click.command()
@click.argument('in_image', type=click.Path(dir_okay=False))
@click.argument('out_image', type=click.Path(dir_okay=False))
@click.option('--clamp/--no-clamp', '-c', default=None,
              help='Clamp (instead of remove) outliers [no-clamp]')
@click.option('--epsilon', '-e', type=float, default=None,
              help='Fraction of outliers to remove, split over both tails [0.0]')
@click.option('--ignore', '-i', 'ignore_value', type=float, default=None,
              help='Value to ignore [-1.0]')
@click.option('--images', type=str, default=None,
              help='Calculate normalization based on these images (comma separated list). '
                   'IN_IMAGE is always included')
@click.option('--minimum', type=float, default=None,
              help='Minimum (overrides automatic estimation)')
@click.option('--maximum', type=float, default=None,
              help='Maximum (overrides automatic estimation)')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
@click.option('--report', '-r', type=click.Path(dir_okay=False, path_type=Path),
              help='Write a JSON report with the computed statistics')
@click.option('--quiet', '-q', is_flag=True, default=False,
              help='Suppress diagnostics, keeping warnings and the final status line')
def main(in_image: str, out_image: str, clamp: Optional[bool], epsilon: Optional[float],
         ignore_value: Optional[float], images: Optional[str], minimum: Optional[float],
         maximum: Optional[float], config: Optional[Path], report: Optional[Path],
         quiet: bool):
    """
    Normalize the pixel values of IN_IMAGE and write them to OUT_IMAGE.

    Values are mapped linearly from an estimated [min, max] range onto
    [0, 1]. The range is taken from all valid values of IN_IMAGE and of
    the images given with --images; with --epsilon the most extreme
    values are trimmed from both tails first.

    Values equal to the ignore value are left untouched. Outliers are
    replaced by the ignore value, or clamped to 0/1 with --clamp.
    """
    # Lazy import to speed up CLI startup
    from grid_normalize.core.logging_utils import get_logger
    from grid_normalize.core.pipeline import normalize_file
    from grid_normalize.io.report import save_report

    logger = get_logger(verbose=not quiet)

    try:
        cfg = load_config(config)
        options = NormalizeOptions.from_config(
            cfg,
            epsilon=epsilon,
            ignore_value=ignore_value,
            clamp=clamp,
            min_override=minimum,
            max_override=maximum,
            source_names=images,
        ).validate()

        result = normalize_file(in_image, out_image, options, logger=logger)

        report_path = report or cfg.get('output.report')
        if report_path:
            save_report(result.as_dict(), Path(report_path))
            logger.success(f"Report written: {report_path}")
    except NormalizeError as e:
        raise click.ClickException(str(e))


if __name__ == '__main__':
    main()
