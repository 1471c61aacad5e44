__version__ = "0.1.0"

def parse_begend(source: str):
    from .frontend import parse_source
    return parse_source(source)

__all__ = ["__version__", "parse_begend"]
