from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def configure_logging(
    level: int = logging.INFO,
    *,
    format: str = DEFAULT_FORMAT,
    force: bool | None = None,
    solver_level: int | None = None,
) -> None:
    """Set up console logging for the analysis scripts.

    The library itself only creates module loggers under ``heat_transfer``:
    ``heat_transfer.hex_solver`` reports each derived parameter and duty
    iteration at DEBUG and a non-converged iteration at WARNING,
    ``heat_transfer.resistance_network`` warns about shrinking pipe radii and
    ``heat_transfer.correction_factor`` notes F = 1 fallbacks at DEBUG.

    `solver_level` sets the ``heat_transfer`` parent logger apart from the root
    `level`, so ``configure_logging(logging.WARNING, solver_level=logging.DEBUG)``
    prints the derivation trace without third-party chatter. `force` is handed
    to ``logging.basicConfig`` to replace handlers installed earlier.
    """

    kwargs: dict[str, object] = {"level": level, "format": format}
    if force is not None:
        kwargs["force"] = force
    logging.basicConfig(**kwargs)
    if solver_level is not None:
        logging.getLogger("heat_transfer").setLevel(solver_level)


__all__ = ["configure_logging", "DEFAULT_FORMAT"]
