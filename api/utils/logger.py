import logging
import sys


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a single stdout handler to the root logger."""
    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_catalog_handler", False) for h in root.handlers):
        # Use StreamHandler instead of FileHandler
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        handler._catalog_handler = True
        root.addHandler(handler)

    return root


logger = logging.getLogger("cosmetics_catalog")
