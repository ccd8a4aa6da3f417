"""Report pipeline entrypoints."""


def run_chromosome_report(*args, **kwargs):
    from cnvscan.pipeline.report import run_chromosome_report as _run

    return _run(*args, **kwargs)


def run_heatmap_report(*args, **kwargs):
    from cnvscan.pipeline.report import run_heatmap_report as _run

    return _run(*args, **kwargs)


__all__ = ["run_chromosome_report", "run_heatmap_report"]
