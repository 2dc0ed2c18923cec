"""Runtime settings for the calculator front end."""

from dataclasses import dataclass
from typing import Optional

from .logging_system import LogLevel


@dataclass
class CalculatorConfig:
    log_level: LogLevel = LogLevel.MINIMAL
    log_to_file: bool = False
    log_file_path: Optional[str] = None
    show_postfix: bool = False     # print the postfix form before the result
    show_tree: bool = False        # print the fully parenthesised tree
    symbolic: bool = False         # print the SymPy rendering

    @classmethod
    def from_args(cls, args) -> 'CalculatorConfig':
        """Build a config from an argparse namespace"""
        log_file = getattr(args, 'log_file', None)
        return cls(
            log_level=LogLevel.from_name(getattr(args, 'log_level', 'minimal')),
            log_to_file=log_file is not None,
            log_file_path=log_file,
            show_postfix=getattr(args, 'show_postfix', False),
            show_tree=getattr(args, 'show_tree', False),
            symbolic=getattr(args, 'symbolic', False),
        )
