"""fintrack - track income, expenses and a savings goal from the terminal."""

__version__ = "0.1.0"
