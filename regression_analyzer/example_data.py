"""
Example data generator for the Excel Regression Analyzer.

Writes one synthetic CSV file with a few numeric columns of known
linear relationship and some deliberately messy cells, for testing
and demonstration:

- ``Advertising`` and ``Sales`` are strongly linear (Sales ≈ 3.2·Ad + 40)
- ``Temperature`` is weakly related to ``Sales``
- ``Price`` carries unit suffixes (``"12.5 USD"``) that the lenient
  numeric rule still accepts
- ``Region`` is text and never offered as an axis
- ``Returns`` has blank cells, so it is excluded from the numeric
  columns
"""

import os
import random

EXAMPLE_FILE_NAME = "example_sales.csv"
EXAMPLE_ROWS = 60

# Sales = slope * Advertising + intercept + noise
TRUE_SLOPE = 3.2
TRUE_INTERCEPT = 40.0


def generate_example_csv(output_dir: str, n_rows: int = EXAMPLE_ROWS) -> str:
    """Generate the example CSV in *output_dir* and return its path."""
    os.makedirs(output_dir, exist_ok=True)

    # Reproducible randomness
    rng = random.Random(42)
    regions = ["North", "South", "East", "West"]

    header = ['Region', 'Advertising', 'Sales', 'Temperature',
              'Price', 'Month', 'Returns']
    lines = [','.join(header)]

    for i in range(n_rows):
        advertising = rng.uniform(5.0, 50.0)
        sales = TRUE_SLOPE * advertising + TRUE_INTERCEPT + rng.gauss(0.0, 6.0)
        temperature = rng.gauss(18.0, 6.0) + 0.02 * sales
        price = rng.uniform(9.0, 15.0)
        # Every eighth row has no returns figure
        returns = "" if i % 8 == 3 else str(rng.randint(0, 9))

        lines.append(','.join([
            regions[i % len(regions)],
            f"{advertising:.2f}",
            f"{sales:.2f}",
            f"{temperature:.1f}",
            f"{price:.2f} USD",
            str(i + 1),
            returns,
        ]))

    path = os.path.join(output_dir, EXAMPLE_FILE_NAME)
    with open(path, 'w', encoding='utf-8', newline='') as fh:
        fh.write('\n'.join(lines) + '\n')
    return path


if __name__ == '__main__':
    # Quick test: generate to a temporary directory and print summary
    import tempfile
    out_dir = os.path.join(tempfile.gettempdir(), 'regression_analyzer_example')
    out_path = generate_example_csv(out_dir)
    print(f"  {out_path} ({os.path.getsize(out_path):,} bytes)")
