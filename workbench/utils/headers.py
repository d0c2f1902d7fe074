def column_label(col_index: int) -> str:
    # NOTE: bijective base-26, A..Z, AA..AZ, BA.., same as spreadsheet applications
    if col_index < 0:
        raise ValueError(f"Column index can not be negative, got {col_index}")

    label = ""
    n = col_index + 1

    while n > 0:
        n, remainder = divmod(n - 1, 26)
        label = chr(65 + remainder) + label

    return label


def row_label(row_index: int) -> str:
    return str(row_index + 1)
