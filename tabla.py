def row_cells(row):
    """Display strings of a row: one per coefficient, then the constant."""
    return row.cells()


def format_table(rows, objective, basis=None):
    cells = [row_cells(row) for row in rows] + [row_cells(objective)]
    n_vars = len(cells[-1]) - 1
    headers = [f"x{i+1}" for i in range(n_vars)] + ["-z"]
    width = max(10, max(len(c) for line in cells + [headers] for c in line) + 2)

    table = "     " + "".join(f"{h:>{width}}" for h in headers) + "\n"
    table += "     " + "-" * (width * len(headers)) + "\n"
    for i, line in enumerate(cells[:-1]):
        table += f"{'R' + str(i+1):<5}" + "".join(f"{c:>{width}}" for c in line) + "\n"
    table += "Z    " + "".join(f"{c:>{width}}" for c in cells[-1]) + "\n"

    if basis is not None:
        table += f"\nBase: {[f'x{i+1}' for i in basis]}"
    return table
