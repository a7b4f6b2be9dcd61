from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .catalog import load_catalog_csv
from .config import DEFAULT_CONFIG, TERTIARY_POLICIES, load_config
from .cvd import CVD_TYPES, check_palette_distinguishability
from .derive import CatalogMode, derive_key_colors
from .harmony import HARMONY_SCHEMES, HarmonySelector
from .hues import nearest_hue, to_catalog_hue

# ============================================================
# Rendering
# ============================================================


def _swatch(hex_color: str) -> Text:
    return Text("   ", style=Style(bgcolor=hex_color))


def _derived_table(result) -> Table:
    table = Table(title=f"Key colors ({result.background_mode} background)")

    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("Tone", justify="right")
    table.add_column("Contrast", justify="right")
    table.add_column("Direction", justify="center")
    table.add_column("Token", no_wrap=True)

    p = result.primary
    table.add_row(
        "primary", p.color.hex, _swatch(p.color.hex), f"{p.tone:.1f}", f"{p.contrast_ratio:.2f}", "", ""
    )
    for role, d in (("secondary", result.secondary), ("tertiary", result.tertiary)):
        table.add_row(
            role,
            d.color.hex,
            _swatch(d.color.hex),
            f"{d.tone:.1f}",
            f"{d.contrast_ratio:.2f}",
            d.direction,
            d.token_id or "[dim]-[/dim]",
        )
    table.caption = f"hue {result.shared_hue:.1f}°  chroma {result.shared_chroma:.1f}"
    return table


def _cvd_table(report) -> Table:
    table = Table(title=f"CVD distinguishability ({report.pass_rate:.0f}% pass)")
    table.add_column("Vision", style="cyan")
    table.add_column("Issues", justify="right")
    for t in CVD_TYPES:
        n = report.issues_by_type.get(t, 0)
        table.add_row(t, f"[red]{n}[/red]" if n else "0")
    return table


def _harmony_table(result, scheme: str) -> Table:
    table = Table(title=f"{scheme} (primary hue {result.primary_hue:.0f}°)")
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Token", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("Offset", justify="right")
    table.add_column("Hue", justify="right")
    for c in result.colors:
        table.add_row(
            c.role,
            c.token.id,
            c.token.hex,
            _swatch(c.token.hex),
            f"{c.hue_offset:+.0f}°",
            f"{c.actual_hue:.0f}°",
        )
    return table


# ============================================================
# CLI
# ============================================================


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
def main():
    """Derive role colors and harmony palettes from a brand primary."""


@main.command()
@click.argument("primary")
@click.option("--background", default="#ffffff", show_default=True)
@click.option("--secondary-target", type=float, default=None, help="Contrast target for secondary.")
@click.option("--tertiary-target", type=float, default=None, help="Contrast target for tertiary.")
@click.option("--tertiary-policy", type=click.Choice(TERTIARY_POLICIES), default=None)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with DerivationConfig fields.",
)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Token catalog CSV (id, hex, hue, step). Enables catalog mode.",
)
@click.option("--catalog-hue", default=None, help='Catalog hue, e.g. "blue" or "Light Blue".')
@click.option("--primary-step", type=int, default=None)
@click.option("--check-cvd", is_flag=True, help="Report CVD distinguishability.")
def derive(
    primary: str,
    background: str,
    secondary_target,
    tertiary_target,
    tertiary_policy,
    config_path,
    catalog_path,
    catalog_hue,
    primary_step,
    check_cvd: bool,
):
    """
    Derive secondary and tertiary colors for PRIMARY.
    """
    try:
        cfg = load_config(config_path) if config_path else DEFAULT_CONFIG
        cfg = cfg.with_overrides(
            secondary_target=secondary_target,
            tertiary_target=tertiary_target,
            tertiary_policy=tertiary_policy,
        )
        mode = None
        if catalog_path is not None:
            mode = CatalogMode(
                load_catalog_csv(catalog_path), hue=catalog_hue, primary_step=primary_step
            )
        elif catalog_hue or primary_step is not None:
            click.echo("[keytone] --catalog-hue/--primary-step ignored without --catalog", err=True)
        result = derive_key_colors(primary, background, catalog_mode=mode, config=cfg)
    except ValueError as exc:
        raise click.ClickException(str(exc))

    console = Console()
    console.print(_derived_table(result))

    if result.secondary.contrast_ratio < cfg.secondary_target:
        click.echo(
            f"[keytone] secondary contrast {result.secondary.contrast_ratio:.2f} "
            f"is below target {cfg.secondary_target}",
            err=True,
        )

    if check_cvd:
        report = check_palette_distinguishability(
            {
                "primary": result.primary.color.hex,
                "secondary": result.secondary.color.hex,
                "tertiary": result.tertiary.color.hex,
            }
        )
        console.print(_cvd_table(report))


@main.command()
@click.argument("primary")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
)
@click.option("--scheme", type=click.Choice(HARMONY_SCHEMES), default="complementary", show_default=True)
def harmony(primary: str, catalog_path: Path, scheme: str):
    """
    Pick catalog tokens in a harmony SCHEME around PRIMARY.
    """
    try:
        selector = HarmonySelector(load_catalog_csv(catalog_path))
        result = selector.generate(primary, scheme)
    except ValueError as exc:
        raise click.ClickException(str(exc))

    if not result.colors:
        click.echo("[keytone] no tokens available for this scheme", err=True)
    Console().print(_harmony_table(result, scheme))


@main.command("nearest-hue")
@click.argument("angle", type=float)
def nearest_hue_cmd(angle: float):
    """
    Show the hue family closest to ANGLE.
    """
    m = nearest_hue(angle)
    click.echo(
        f"{m.family.value}\tcenter={m.center:g}\tdistance={m.distance:g}\t"
        f"catalog={to_catalog_hue(m.family).value}"
    )


if __name__ == "__main__":
    main()
