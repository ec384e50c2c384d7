r"""mojiconv: grapheme-aware character conversion of selected CSV columns
Main modules: mojiconv.mc_convert, mojiconv.mc_process, mojiconv.mc_mojimap
Argument help: mc-convert -h, mc-mojimap -h"""
__version__ = '1.0.0'
__description__ = '''The mojiconv scripts convert characters in selected columns of CSV files according to a conversion table, at the level of user-perceived characters (grapheme clusters, including ideographic variation sequences), with configurable handling of characters missing from the table and optional validation against a target encoding such as Shift_JIS.'''
last_mod_date = 'October 19, 2026'
from . import mc_convert, mc_process, mc_mojimap
__all__ = [mc_convert, mc_process, mc_mojimap]
