import descent

# Rosenbrock function with its global minimum at (1, 1)
f = descent.problems.Rosenbrock()

# gradient descent with the default Armijo line search
gd = descent.GradientDescent()

solution = gd.minimize(f, f.random_start())
print("Found solution for Rosenbrock function at f({}) = {}".format(
    solution.position.tolist(), solution.value))
