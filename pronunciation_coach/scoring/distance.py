from typing import List


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings.

    Counts the minimum number of single-character insertions, deletions and
    substitutions that turn ``a`` into ``b``. The table has
    ``len(a) + 1`` rows and ``len(b) + 1`` columns; row 0 and column 0 hold
    the cost of building each prefix from the empty string.
    """
    rows = len(a) + 1
    cols = len(b) + 1
    table: List[List[int]] = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if a[i - 1] == b[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j - 1],  # substitute
                    table[i][j - 1],  # insert
                    table[i - 1][j],  # delete
                )

    return table[rows - 1][cols - 1]
