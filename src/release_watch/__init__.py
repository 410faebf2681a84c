"""Release watch: polls GitHub for new upstream releases and reports them."""

__version__ = "0.1.0"
