"""
DataSource: the "I have observations" abstraction.

DataSource holds named numeric columns and doesn't know it is feeding a
polynomial fit. The design module decides which columns are x and y.

The native input format is a count-header table:

    3
    0.0 0.0
    1.0 1.0
    2.0 2.0

The first non-blank line holds the number of observations n; exactly n
records of two whitespace-separated numbers follow.

Usage:
    from pypolyfit import DataSource

    ds = DataSource.from_file("data/data.dat")
    ds = DataSource.from_arrays(x=x, y=y)
    ds = DataSource.from_dataframe(df)

    ds.keys()   # frozenset({'x', 'y'})
    x = ds['x']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pypolyfit.core.compute.precision import allocate
from pypolyfit.core.exceptions import MalformedInputError, ValidationError
from pypolyfit.core.validation import check_2d, check_array

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

COUNT_HEADER_SUFFIXES = ('.dat', '.txt')


def read_observations(lines: Iterable[str]) -> NDArray[np.floating[Any]]:
    """
    Parse a count-header observation table.

    Loads in two phases: the count header is read first, the (n, 2)
    buffer is allocated once, then filled record by record.

    Args:
        lines: Text lines, with or without trailing newlines

    Returns:
        float64 array of shape (n, 2); column 0 is x, column 1 is y

    Raises:
        MalformedInputError: If the header is missing or not a non-negative
            integer, if a record does not hold exactly two numeric fields,
            or if the number of records differs from the declared count
        AllocationError: If the buffer for n records cannot be allocated
    """
    declared: int | None = None
    data: NDArray[np.floating[Any]] | None = None
    count = 0

    for line_number, line in enumerate(lines, start=1):
        fields = line.split()
        if not fields:
            continue

        if declared is None:
            declared = _parse_count(fields, line_number)
            logger.debug("line %d: declared %d observations", line_number, declared)
            data = allocate((declared, 2), 'observation buffer', order='C')
            continue

        if count >= declared:
            raise MalformedInputError(
                f"line {line_number}: more records than the declared count {declared}",
                line_number=line_number,
                declared_count=declared,
                records_read=count,
            )

        data[count] = _parse_record(fields, line_number, declared, count)
        count += 1

    if declared is None:
        raise MalformedInputError(
            "missing observation count header (input is empty)",
            line_number=None,
            declared_count=None,
            records_read=0,
        )

    if count < declared:
        raise MalformedInputError(
            f"declared {declared} observations but found only {count} records",
            line_number=None,
            declared_count=declared,
            records_read=count,
        )

    return data


def _parse_count(fields: list[str], line_number: int) -> int:
    """Parse the count header line."""
    if len(fields) != 1:
        raise MalformedInputError(
            f"line {line_number}: expected a single observation count, "
            f"got {len(fields)} fields",
            line_number=line_number,
        )
    try:
        n = int(fields[0])
    except ValueError as e:
        raise MalformedInputError(
            f"line {line_number}: observation count {fields[0]!r} is not an integer",
            line_number=line_number,
        ) from e
    if n < 0:
        raise MalformedInputError(
            f"line {line_number}: observation count must be >= 0, got {n}",
            line_number=line_number,
            declared_count=n,
        )
    return n


def _parse_record(
    fields: list[str],
    line_number: int,
    declared: int,
    count: int,
) -> tuple[float, float]:
    """Parse one (x, y) record."""
    if len(fields) != 2:
        raise MalformedInputError(
            f"line {line_number}: expected 2 fields (x y), got {len(fields)}",
            line_number=line_number,
            declared_count=declared,
            records_read=count,
        )
    try:
        return float(fields[0]), float(fields[1])
    except ValueError as e:
        raise MalformedInputError(
            f"line {line_number}: non-numeric field in record {' '.join(fields)!r}",
            line_number=line_number,
            declared_count=declared,
            records_read=count,
        ) from e


def _decode_lines(raw_lines: Iterable[bytes], path: Path) -> Iterator[str]:
    """Decode a binary line stream as UTF-8, reporting bad bytes by line."""
    for line_number, raw in enumerate(raw_lines, start=1):
        try:
            yield raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedInputError(
                f"{path}: line {line_number} is not valid UTF-8 text ({e.reason})",
                line_number=line_number,
            ) from e


@dataclass
class DataSource:
    """
    Named numeric columns plus metadata. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Array Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available arrays.

        Example:
            >>> DataSource.from_arrays(x=x, y=y).keys()
            frozenset({'x', 'y'})
        """
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named array.

        Raises:
            KeyError: If key not found, listing the available keys
        """
        if key not in self._data:
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {set(self.keys())}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of observations (rows)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_arrays(cls, **named_arrays: ArrayLike) -> DataSource:
        """Construct from array-likes, e.g. from_arrays(x=x, y=y)."""
        storage: dict[str, NDArray[np.floating[Any]]] = {}
        n_obs: int | None = None

        for name, arr in named_arrays.items():
            storage[name] = np.asarray(arr, dtype=np.float64)
            if n_obs is None and storage[name].ndim > 0:
                n_obs = storage[name].shape[0]

        return cls(
            _data=storage,
            _metadata={'n_observations': n_obs or 0, 'source': 'arrays'},
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, source_path: str | None = None) -> DataSource:
        """Construct from count-header text lines."""
        table = read_observations(lines)
        metadata: dict[str, Any] = {
            'n_observations': table.shape[0],
            'source': 'count_header',
        }
        if source_path:
            metadata['source_path'] = source_path
        x = table[:, 0].copy()
        y = table[:, 1].copy()
        # loaded observations are never modified downstream
        x.flags.writeable = False
        y.flags.writeable = False
        return cls(_data={'x': x, 'y': y}, _metadata=metadata)

    @classmethod
    def from_file(cls, path: str | Path) -> DataSource:
        """
        Construct from a file.

        Supported formats:
            .dat, .txt   count-header table (x y records)
            .csv, .tsv   table with 'x' and 'y' columns (pandas)
            .npy         two-column array (x, y)

        Raises:
            ValidationError: Unknown suffix or wrong array shape
            MalformedInputError: Table cannot be decoded or parsed
            FileNotFoundError: Path does not exist
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in COUNT_HEADER_SUFFIXES:
            with path.open('rb') as f:
                ds = cls.from_lines(_decode_lines(f, path), source_path=str(path))
        elif suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            try:
                df = pd.read_csv(path, sep=sep)
            except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
                raise MalformedInputError(f"{path}: cannot parse table: {e}") from e
            ds = cls.from_dataframe(df, source_path=str(path))
        elif suffix == '.npy':
            data = check_array(np.load(path), str(path))
            check_2d(data, str(path))
            if data.shape[1] != 2:
                raise ValidationError(
                    f"{path}: expected an (n, 2) array, got shape {data.shape}"
                )
            ds = cls.from_arrays(x=data[:, 0], y=data[:, 1])
            ds._metadata['source_path'] = str(path)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")

        logger.info("Loaded %d observations from %s", ds.n_observations, path)
        return ds

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """Construct from pandas DataFrame; every column becomes an array."""
        storage: dict[str, NDArray[np.floating[Any]]] = {}

        for col in df.columns:
            try:
                storage[str(col)] = df[col].to_numpy(dtype=np.float64)
            except (ValueError, TypeError) as e:
                raise MalformedInputError(
                    f"column {col!r} is not numeric: {e}"
                ) from e

        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls(_data=storage, _metadata=metadata)
