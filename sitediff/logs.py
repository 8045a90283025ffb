import logging
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(output_dir, level='INFO'):
    """Log to ``<output_dir>/sitediff.log`` and the console"""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(output_dir / 'sitediff.log', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )
