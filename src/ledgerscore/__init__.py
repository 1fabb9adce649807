"""Customer debt rating for accounts receivable ledgers."""

__version__ = "0.1.0"


# The CLI pulls in click and SQLAlchemy, so it is only imported on demand
def __getattr__(name):
    if name == "main":
        from ledgerscore.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
