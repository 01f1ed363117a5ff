"""chessrules — chess rules engine with legal move generation and execution."""

__version__ = "0.1.0"
