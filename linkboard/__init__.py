"""Link dashboard core: bulk description runner and site icon synthesizer."""

__version__ = "0.1.0"
