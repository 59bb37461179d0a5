"""
Benchmarks a naive Fibonacci function.

Example Usage:
  python examples/fib.py --list
  python examples/fib.py -s 20 --summary fib.csv "fib/fib 1"
  python examples/fib.py --plot-kde png --kde-same-axis fib
"""

from bench_and_plot import B, bench, bgroup, default_main


def fib(n: int) -> int:
    return n if n < 2 else fib(n - 1) + fib(n - 2)


if __name__ == "__main__":
    default_main(
        [
            bgroup(
                "fib",
                [
                    bench("fib 10", B(fib, 10)),
                    bench("fib 15", B(fib, 15)),
                    bench("fib 20", B(fib, 20)),
                ],
            ),
            bench("sorted 1000", B(sorted, list(range(1000, 0, -1)))),
        ]
    )
