import descent

# print every iteration
descent.logging.set_log_level('DEBUG')

class Rosenbrock(descent.DifferentiableFunction):
    def __init__(self, a, b):
        self.a = a
        self.b = b

    def value(self, x):
        return (self.a - x[0])**2 + self.b*(x[1] - x[0]**2)**2

    def gradient(self, x):
        dx = -2*self.a + 4*self.b*x[0]**3 - 4*self.b*x[0]*x[1] + 2*x[0]
        dy = 2*self.b*(x[1] - x[0]**2)
        return [dx, dy]

solution = descent.GradientDescent().minimize(Rosenbrock(a=1., b=100.), [-3., -4.])
print("Solution for Rosenbrock function: {}".format(solution))
