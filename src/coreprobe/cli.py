"""coreprobe command-line interface."""

import click

from coreprobe.config import MIN_INTERVAL, ConfigError, ProbeConfig
from coreprobe.logconfig import Logger
from coreprobe.sources import BACKENDS


@click.command()
@click.option("--interval", "-i", type=float, default=None, help="Seconds between frames (default 1.0).")
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default=None,
    help="Data sources: procfs (Linux), psutil, or auto.",
)
@click.option("--plain", is_flag=True, help="Redraw in place with ANSI codes instead of the full-screen UI.")
@click.option("--once", is_flag=True, help="Print a single plain frame and exit.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level (default WARNING).",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs to this file instead of stderr.")
def main(interval, backend, plain, once, log_level, log_file):
    """Show per-core CPU frequency and running processes, refreshed in place."""
    try:
        config = ProbeConfig.from_env()
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e

    if interval is not None:
        config.interval = max(MIN_INTERVAL, interval)
    if backend is not None:
        config.backend = backend
    if log_level is not None:
        config.log_level = log_level
    if log_file is not None:
        config.log_file = log_file

    try:
        Logger.configure(level=config.log_level, output=config.log_file)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COREPROBE_LOG_LEVEL") from e

    from coreprobe.sources import get_platform_sources

    try:
        sources = get_platform_sources(config)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COREPROBE_BACKEND") from e

    Logger.get("cli").info("Starting coreprobe (backend=%s, interval=%.1fs)", config.backend, config.interval)

    if plain or once:
        from coreprobe.render import PlainRenderer, run_plain
        from coreprobe.sampler import FrequencySampler, ProcessEnumerator

        renderer = PlainRenderer(rewind=not once)
        try:
            run_plain(
                FrequencySampler.from_sources(sources),
                ProcessEnumerator.from_sources(sources),
                renderer,
                interval=config.interval,
                iterations=1 if once else None,
            )
        except KeyboardInterrupt:
            pass
        return

    from coreprobe.app import ProbeApp

    ProbeApp(config=config, sources=sources).run()


if __name__ == "__main__":
    main()
