"""
Example: Solving an assignment problem with scipy

Three men and three women are matched one to one so that the total
compatibility score is as high as possible.
"""

import logging

from lpmodeler import Binary, Problem, ScipySolver, SolverParameters, lp_sum, sum_over


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s: %(message)s")

    # Problem data
    men = ["A", "B", "C"]
    women = ["D", "E", "F"]
    compatibility_score = {
        ("A", "D"): 50.0,
        ("A", "E"): 75.0,
        ("A", "F"): 75.0,
        ("B", "D"): 60.0,
        ("B", "E"): 95.0,
        ("B", "F"): 80.0,
        ("C", "D"): 60.0,
        ("C", "E"): 70.0,
        ("C", "F"): 80.0,
    }

    problem = Problem("Matchmaking", "maximize")

    # One binary variable per pair
    pairs = {(m, w): Binary(f"{m}_{w}") for m in men for w in women}

    # Objective
    problem += lp_sum(score * pairs[key] for key, score in compatibility_score.items())

    # Each man is assigned to exactly one woman
    for m in men:
        problem += sum_over(women, lambda w: pairs[(m, w)]).equal(1)

    # Each woman is assigned to exactly one man
    for w in women:
        problem += sum_over(men, lambda m: pairs[(m, w)]).equal(1)

    params = SolverParameters()
    params.time_limit = 10.0

    solution = ScipySolver(params).run(problem)

    print()
    print(solution)
    print()
    print(f"Status: {solution.status.value}")
    if solution.is_feasible():
        print(f"Objective Value: {solution.eval()}")
        for (m, w), var in pairs.items():
            if solution.get_bool(var):
                print(f"{var.name} = 1")
    print()


if __name__ == "__main__":
    main()
