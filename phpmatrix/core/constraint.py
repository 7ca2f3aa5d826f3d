"""Constraint evaluation for phpmatrix.

A constraint such as ``>=7.4 <8.3 || ^8.4`` is read as OR-separated
clauses (``||``, or Composer's single ``|``), each made of AND-joined atoms
(whitespace or ``,``). Every atom is desugared into a tuple of comparator
bounds over :class:`packaging.version.Version`:

======================  ==========================================
Atom                    Bounds
======================  ==========================================
``8.1.2`` / ``=8.1.2``  ``== 8.1.2``
``8.1`` / ``8.1.*``     ``>= 8.1.0, < 8.2.0``
``>=8.1`` / ``<8.1``    ``>= 8.1.0`` / ``< 8.1.0``
``>8.1``                ``>= 8.2.0``
``<=8.1``               ``< 8.2.0``
``~8.1.2`` / ``~8.1``   ``>= 8.1.x, < 8.2.0``
``~8``                  ``>= 8.0.0, < 9.0.0``
``^8.1``                ``>= 8.1.0, < 9.0.0``
``^0.2.3``              ``>= 0.2.3, < 0.3.0``
``7.4 - 8.2``           ``>= 7.4.0, < 8.3.0``
``*``                   (no bounds)
======================  ==========================================

Atoms that cannot be parsed never raise; they simply match nothing, so a
typo in one OR branch leaves the other branches usable.
"""

from __future__ import annotations

import re
import operator
from typing import Callable, Dict, List, Optional, Tuple

from packaging.version import Version

from phpmatrix.utils.logger import get_logger
from phpmatrix.models.version import CanonicalVersion
from phpmatrix.core.canonical import PartialVersion, make_version, parse_partial

logger = get_logger("core.constraint")

__all__ = ["parse_constraint", "matches", "satisfies"]

Comparator = Tuple[Callable[[Version, Version], bool], Version]
#: ``None`` marks a malformed atom.
Atom = Optional[Tuple[Comparator, ...]]
Clause = Tuple[Atom, ...]
ParsedConstraint = Tuple[Clause, ...]

_OR_SEPARATOR = re.compile(r"\|\|?")
_AND_SEPARATOR = re.compile(r"[\s,]+")
_OPERATOR = re.compile(r"^(~>|>=|<=|==|>|<|=|~|\^)?(.*)$")

_OPERATORS = frozenset(("~>", ">=", "<=", "==", ">", "<", "=", "~", "^"))

# Bound that no version satisfies (every release is >= 0.0.0)
_NOTHING: Tuple[Comparator, ...] = ((operator.lt, make_version(0)),)


# ---------------------------------------------------------------------------
# Operator desugaring
# ---------------------------------------------------------------------------


def _exact(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return ()
    if partial.is_complete:
        return ((operator.eq, partial.floor()),)
    return ((operator.ge, partial.floor()), (operator.lt, partial.next_unit()))


def _greater(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return _NOTHING
    if partial.is_complete:
        return ((operator.gt, partial.floor()),)
    return ((operator.ge, partial.next_unit()),)


def _greater_equal(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return ()
    return ((operator.ge, partial.floor()),)


def _less(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return _NOTHING
    return ((operator.lt, partial.floor()),)


def _less_equal(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return ()
    if partial.is_complete:
        return ((operator.le, partial.floor()),)
    return ((operator.lt, partial.next_unit()),)


def _tilde(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return ()
    if partial.minor is None:
        upper = make_version(partial.major + 1)
    else:
        upper = make_version(partial.major, partial.minor + 1)
    return ((operator.ge, partial.floor()), (operator.lt, upper))


def _caret(partial: PartialVersion) -> Tuple[Comparator, ...]:
    if partial.is_any:
        return ()
    major, minor, patch = partial
    # Keep the first non-zero component fixed
    if major > 0 or minor is None:
        upper = make_version(major + 1)
    elif minor > 0 or patch is None:
        upper = make_version(0, minor + 1)
    else:
        upper = make_version(0, 0, patch + 1)
    return ((operator.ge, partial.floor()), (operator.lt, upper))


_BUILDERS: Dict[str, Callable[[PartialVersion], Tuple[Comparator, ...]]] = {
    "=": _exact,
    "==": _exact,
    ">": _greater,
    ">=": _greater_equal,
    "<": _less,
    "<=": _less_equal,
    "~": _tilde,
    "~>": _tilde,
    "^": _caret,
}


def _hyphen_range(low: str, high: str) -> Atom:
    lower = parse_partial(low)
    upper = parse_partial(high)
    if lower is None or upper is None:
        return None
    return _greater_equal(lower) + _less_equal(upper)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _split_atoms(clause: str) -> List[str]:
    """Split a clause into atoms, keeping ``A - B`` and ``>= A`` together."""
    tokens = [token for token in _AND_SEPARATOR.split(clause.strip()) if token]
    atoms: List[str] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if i + 2 < len(tokens) and tokens[i + 1] == "-":
            atoms.append(f"{token} - {tokens[i + 2]}")
            i += 3
            continue
        if token in _OPERATORS and i + 1 < len(tokens):
            token += tokens[i + 1]
            i += 1
        atoms.append(token)
        i += 1

    return atoms


def _parse_atom(atom: str) -> Atom:
    if " - " in atom:
        low, high = atom.split(" - ", 1)
        return _hyphen_range(low, high)

    match = _OPERATOR.match(atom)
    assert match is not None  # the operand group matches anything
    symbol, literal = match.group(1) or "=", match.group(2)

    partial = parse_partial(literal)
    if partial is None:
        return None
    return _BUILDERS[symbol](partial)


def parse_constraint(constraint: str) -> ParsedConstraint:
    """Parse ``constraint`` into clauses of comparator bounds.

    Parsing never fails: malformed atoms are kept as ``None`` and an empty
    clause has no atoms, both of which match nothing.

    Args:
        constraint: Raw constraint string, e.g. ``"^7.4 || ^8.0"``.

    Returns:
        One tuple per OR clause, each holding one entry per atom.
    """
    if not isinstance(constraint, str):
        logger.debug("Ignoring non-string constraint %r", constraint)
        return ()

    clauses: List[Clause] = []
    for raw_clause in _OR_SEPARATOR.split(constraint):
        atoms: List[Atom] = []
        for raw_atom in _split_atoms(raw_clause):
            parsed = _parse_atom(raw_atom)
            if parsed is None:
                logger.debug("Unrecognized constraint atom %r in %r", raw_atom, constraint)
            atoms.append(parsed)
        clauses.append(tuple(atoms))

    return tuple(clauses)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def _atom_matches(version: Version, atom: Atom) -> bool:
    if atom is None:
        return False
    return all(compare(version, bound) for compare, bound in atom)


def matches(version: CanonicalVersion, parsed: ParsedConstraint) -> bool:
    """Return True if ``version`` satisfies an already parsed constraint."""
    target = version.comparable
    return any(
        bool(clause) and all(_atom_matches(target, atom) for atom in clause)
        for clause in parsed
    )


def satisfies(version: CanonicalVersion, constraint: str) -> bool:
    """Return True if ``version`` satisfies ``constraint``.

    Example::

        >>> from phpmatrix.core.canonical import canonicalize
        >>> satisfies(canonicalize("8.2"), ">=7.4 <8.3 || ^8.4")
        True
        >>> satisfies(canonicalize("8.3"), ">=7.4 <8.3 || ^8.4")
        False
    """
    return matches(version, parse_constraint(constraint))
