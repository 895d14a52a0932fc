"""CSV import of the roster and of per-person date preferences."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Optional, Tuple, Union

import pandas as pd

from oncall.domain.errors import ConfigurationError, CsvFormatError
from oncall.domain.roster import Roster
from oncall.services.dates import normalize_date

logger = logging.getLogger(__name__)

CsvSource = Union[str, Path, IO[str]]

UNAVAILABLE_MARKERS = ("unavail", "not", "cannot")

# Semicolons always separate dates; a comma does unless a bare year follows it ("Jan 3, 2025")
DATE_SEPARATOR = re.compile(r";|,(?!\s*\d{4}\s*(?:[,;]|$))")


@dataclass
class ImportResult:
    imported: int = 0
    warnings: List[str] = field(default_factory=list)


def _read_table(source: CsvSource) -> pd.DataFrame:
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise CsvFormatError("CSV file appears to be empty") from e
    df = df.fillna("")
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    return df


def _find_column(columns: List[str], *markers: str, exclude: Optional[str] = None) -> Optional[str]:
    for col in columns:
        if col == exclude:
            continue
        if any(m in col for m in markers):
            return col
    return None


def parse_date_list(text: str) -> Tuple[List[str], List[str]]:
    """
    Split a cell of dates separated by commas or semicolons.

    A comma followed only by a four-digit year belongs to the date before it.

    Returns:
        (canonical dates, tokens that could not be read as dates)
    """
    dates: List[str] = []
    bad: List[str] = []
    if not text:
        return dates, bad
    for token in DATE_SEPARATOR.split(str(text)):
        token = token.strip()
        if not token:
            continue
        try:
            dates.append(normalize_date(token))
        except ConfigurationError:
            bad.append(token)
    return dates, bad


def import_preferences_csv(roster: Roster, source: CsvSource) -> ImportResult:
    """
    Import preferences keyed by an email column.

    The email column is the first header containing "email"; the
    unavailable column the first containing "unavail", "not" or "cannot";
    the preferred column the first other header containing "prefer".
    Rows with unknown emails, unreadable dates or conflicting dates are
    skipped and reported.

    Args:
        roster: Roster to update
        source: CSV path or open text stream

    Returns:
        ImportResult with the number of rows applied and row warnings

    Raises:
        CsvFormatError: If the file is empty or has no email column
    """
    df = _read_table(source)
    columns = list(df.columns)

    email_col = _find_column(columns, "email")
    if email_col is None:
        raise CsvFormatError('Could not find Email column in CSV. Expected column with "email" in the header.')
    unavailable_col = _find_column(columns, *UNAVAILABLE_MARKERS, exclude=email_col)
    preferred_col = _find_column(columns, "prefer", exclude=unavailable_col)

    result = ImportResult()
    for idx, row in df.iterrows():
        line = int(idx) + 2  # header is line 1
        email = str(row[email_col]).strip().lower()
        if not email:
            continue
        if email not in roster:
            result.warnings.append(f'Row {line}: Unknown email "{email}"')
            continue

        preferred, bad_preferred = parse_date_list(row[preferred_col]) if preferred_col else ([], [])
        unavailable, bad_unavailable = parse_date_list(row[unavailable_col]) if unavailable_col else ([], [])
        bad = bad_preferred + bad_unavailable
        if bad:
            for token in bad:
                result.warnings.append(f'Row {line}: Could not read date "{token}"')
            continue

        try:
            roster.set_preferences(email, preferred, unavailable)
        except ConfigurationError as e:
            result.warnings.append(f"Row {line}: {e}")
            continue
        result.imported += 1

    logger.info("Imported %d preference row(s) with %d warning(s)", result.imported, len(result.warnings))
    return result


def import_roster_csv(roster: Roster, source: CsvSource) -> ImportResult:
    """
    Add people from a CSV with a name column and an email column.

    Emails are trimmed and lower-cased. Duplicates are reported, not fatal.
    """
    df = _read_table(source)
    columns = list(df.columns)

    email_col = _find_column(columns, "email")
    if email_col is None:
        raise CsvFormatError('Could not find Email column in CSV. Expected column with "email" in the header.')
    name_col = _find_column(columns, "name", exclude=email_col)

    result = ImportResult()
    for idx, row in df.iterrows():
        line = int(idx) + 2
        email = str(row[email_col]).strip().lower()
        if not email:
            continue
        name = str(row[name_col]).strip() if name_col else ""
        try:
            roster.add_person(name or email, email)
        except ConfigurationError as e:
            result.warnings.append(f"Row {line}: {e}")
            continue
        result.imported += 1

    logger.info("Imported %d person(s) into the roster", result.imported)
    return result
