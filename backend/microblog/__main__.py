"""Entry point for `python -m microblog`."""

from microblog.main import run

run()
