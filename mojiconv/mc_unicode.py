#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Splits text into user-perceived characters (extended grapheme clusters).
A grapheme cluster such as an ideographic variation sequence (base ideograph + variation selector, e.g. 葛󠄀),
a letter with combining marks (e.g. é as e + U+0301), a flag (two regional indicators) or a ZWJ emoji sequence
(e.g. 👨‍👩‍👧‍👦) is treated as one unit, so that substitution never splits it.
"""
# -*- encoding: utf-8 -*-

import regex
from typing import List, Optional
import unicodeblock.blocks

grapheme_cluster_re = regex.compile(r'\X')


def split_characters(text: str) -> List[str]:
    """Splits text into grapheme clusters, e.g. '龍A🐉' -> ['龍', 'A', '🐉']; '' -> []"""
    return grapheme_cluster_re.findall(text)


def count_characters(text: str) -> int:
    """Number of grapheme clusters, e.g. '👨‍👩‍👧‍👦ABC' -> 4"""
    return len(split_characters(text))


def get_char_at(text: str, index: int) -> Optional[str]:
    """Grapheme cluster at 0-based index; None if index is negative or out of range (no wrap-around)."""
    if index < 0:
        return None
    chars = split_characters(text)
    return chars[index] if index < len(chars) else None


def join_characters(chars: List[str]) -> str:
    return ''.join(chars)


def code_point_str(s: str) -> str:
    """Example: '葛󠄀' -> 'U+845B U+E0100'"""
    return ' '.join(f'U+{ord(c):04X}' for c in s)


def unicode_block(char: str) -> str:
    """Safe version of character to Unicode block. Example: '龍' -> 'CJK_UNIFIED_IDEOGRAPHS'"""
    try:
        block_name = unicodeblock.blocks.of(char) or 'OTHER'
    except (ValueError, TypeError):
        block_name = '_UNDEFINED_'
    return block_name


def describe_character(cluster: str) -> str:
    """Human-readable description for log messages, e.g. '"龍" (U+9F8D, CJK_UNIFIED_IDEOGRAPHS)'
    The block is that of the first (base) code point of the cluster."""
    if not cluster:
        return '""'
    return f'"{cluster}" ({code_point_str(cluster)}, {unicode_block(cluster[0])})'
