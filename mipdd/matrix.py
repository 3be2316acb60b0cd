"""
    Sparse constraint matrix, stored both column-wise and row-wise.

    The readers collect the matrix as (column, row, value) triplets, column by
    column. `ConstraintMatrix` turns them into compressed numpy arrays so that
    both a column and a row can be sliced out without scanning the triplets.

    ===============
    List of classes
    ===============
    .. autosummary::
        :nosignatures:

        ConstraintMatrix
"""
import numpy as np


def _freeze(*arrays):
    for arr in arrays:
        arr.flags.writeable = False


def _starts(indices, n):
    # start offset of each of the n slices in an array sorted on `indices`
    counts = np.bincount(indices, minlength=n)
    return np.concatenate(([0], np.cumsum(counts))).astype(np.int64)


class ConstraintMatrix(object):
    """
        Immutable sparse matrix with `nrows` rows and `ncols` columns.

        Entries keep the order they were given in within a (column, row) pair,
        duplicate pairs are kept as separate entries.
    """

    def __init__(self, entries, nrows, ncols, dtype=float):
        """
            :param entries: iterable of (column_index, row_index, value) triplets
            :param nrows: number of rows
            :param ncols: number of columns
            :param dtype: numpy dtype of the values (`object` for exact arithmetic)
        """
        entries = list(entries)
        self.nrows = int(nrows)
        self.ncols = int(ncols)
        self.dtype = np.dtype(dtype)

        cols = np.array([e[0] for e in entries], dtype=np.int64)
        rows = np.array([e[1] for e in entries], dtype=np.int64)
        vals = np.array([e[2] for e in entries], dtype=self.dtype)

        if len(entries):
            assert 0 <= cols.min() and cols.max() < self.ncols, "column index out of range"
            assert 0 <= rows.min() and rows.max() < self.nrows, "row index out of range"

        # column-major, ascending row index inside each column (lexsort is stable)
        order = np.lexsort((rows, cols))
        self._col_start = _starts(cols, self.ncols)
        self._col_rows = rows[order]
        self._col_vals = vals[order]

        # row-major, ascending column index inside each row
        order = np.lexsort((cols, rows))
        self._row_start = _starts(rows, self.nrows)
        self._row_cols = cols[order]
        self._row_vals = vals[order]

        _freeze(self._col_start, self._col_rows, self._col_vals,
                self._row_start, self._row_cols, self._row_vals)

    @property
    def shape(self):
        return (self.nrows, self.ncols)

    @property
    def nnz(self):
        """Number of stored entries"""
        return len(self._col_vals)

    @property
    def col_sizes(self):
        return np.diff(self._col_start)

    @property
    def row_sizes(self):
        return np.diff(self._row_start)

    def column(self, j):
        """
            Entries of column `j`.

            :return: (row_indices, values), row indices ascending
        """
        s, e = self._col_start[j], self._col_start[j + 1]
        return self._col_rows[s:e], self._col_vals[s:e]

    def row(self, i):
        """
            Entries of row `i`.

            :return: (column_indices, values), column indices ascending
        """
        s, e = self._row_start[i], self._row_start[i + 1]
        return self._row_cols[s:e], self._row_vals[s:e]

    def triplets(self):
        """
            Iterate over (column_index, row_index, value), column by column.
        """
        for j in range(self.ncols):
            rows, vals = self.column(j)
            for i, v in zip(rows, vals):
                yield j, int(i), v

    def to_dense(self):
        """
            Dense 2D numpy array of shape (nrows, ncols), duplicate entries are summed.
        """
        dense = np.zeros(self.shape, dtype=self.dtype)
        for j, i, v in self.triplets():
            dense[i, j] += v
        return dense

    def __setstate__(self, state):
        self.__dict__.update(state)
        _freeze(self._col_start, self._col_rows, self._col_vals,
                self._row_start, self._row_cols, self._row_vals)

    def __len__(self):
        return self.nnz

    def __repr__(self):
        return f"ConstraintMatrix(shape={self.shape}, nnz={self.nnz})"
