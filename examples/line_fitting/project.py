import numpy as np

import descent

# sum of squared errors of a linear model over noisy observations
class SSE(descent.DifferentiableSummation):
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def terms(self):
        return len(self.y)

    def term_value(self, w, i):
        return 0.5*(self.y[i] - model(w, self.x[i]))**2

    def term_gradient(self, w, i):
        e = self.y[i] - model(w, self.x[i])
        return -e*np.concatenate(([1.], self.x[i]))

# linear model f(x) = w_0 + w_1*x_1 + w_2*x_2
def model(w, x):
    return w[0] + np.dot(w[1:], x)

true_coefficients = np.array([13.37, -4.2, np.pi])
print("Approximating the linear regression coefficients {} using SGD "
      "given 100 noisy samples".format(true_coefficients.tolist()))

rng = np.random.default_rng(42)
x = rng.random((100, 2))
y = np.array([model(true_coefficients, xi) for xi in x]) + rng.standard_normal(100)

sgd = descent.StochasticGradientDescent(max_iter=1000, seed=42)
solution = sgd.minimize(SSE(x, y), np.ones(3))
print("Found coefficients {} with a SSE = {}".format(
    solution.position.tolist(), solution.value))
