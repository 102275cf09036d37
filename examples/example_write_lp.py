"""
Example: Building a problem and writing it in LP format

Problem:
    maximize    10*a + 20*b
    subject to  500*a + 1200*b + 1500*c <= 10000
                a <= b
                a, b, c integer
"""

import logging

import lpmodeler
from lpmodeler import Integer, Problem


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    print()
    print("=" * 70)
    print("lpmodeler Example: LP file output")
    print("=" * 70)
    print()

    # Define variables
    a = Integer("a")
    b = Integer("b")
    c = Integer("c")

    # Define problem and objective
    problem = Problem("One Problem", "maximize")
    problem += 10 * a + 20 * b

    # Constraints, constants on either side are moved to the right
    problem += (500 * a + 1200 * b + 1500 * c) <= 10000
    problem += a <= b

    print(problem)
    print()
    print(problem.to_lp_format())

    problem.write_lp("problem.lp")
    print("Model written to problem.lp")
    print()
    print("=" * 70)
    print()


if __name__ == "__main__":
    print(f"lpmodeler version: {lpmodeler.__version__}")
    main()
