# pylint: skip-file
import itertools

import numpy as np
import pyomo.environ as pe
from pyomo.repn import generate_standard_repn
from scipy.optimize import linprog


TOL = 1e-6


def bilinear_model(x_bounds, y_bounds):
    m = pe.ConcreteModel()
    m.x = pe.Var(bounds=x_bounds)
    m.y = pe.Var(bounds=y_bounds)
    m.z = pe.Var()
    return m

def constraint_violation(constraint):
    body = pe.value(constraint.body)
    violation = 0.0
    if constraint.has_lb():
        violation = max(violation, constraint.lb - body)
    if constraint.has_ub():
        violation = max(violation, body - constraint.ub)
    return violation

def violated_constraints(block, tol=TOL):
    return [
        constraint.name
        for constraint in block.component_data_objects(pe.Constraint, active=True)
        if constraint_violation(constraint) > tol
    ]

def is_feasible(block, tol=TOL):
    return not violated_constraints(block, tol)

def set_point(m, x, y, z):
    m.x.set_value(x)
    m.y.set_value(y)
    m.z.set_value(z)

def mccormick_interval(x, y, x_lb, x_ub, y_lb, y_ub):
    """Range of z allowed by the McCormick envelope at (x, y)."""
    lower = max(x_lb*y + y_lb*x - x_lb*y_lb, x_ub*y + y_ub*x - x_ub*y_ub)
    upper = min(x_lb*y + y_ub*x - x_lb*y_ub, x_ub*y + y_lb*x - x_ub*y_lb)
    return lower, upper

def segment_weights(origin, non_origin, segment, point, tol=1e-9):
    """Weights of `point` in the simplex of `segment` (1-based).

    Returns None if the point is not in the simplex.
    """
    o = np.array(origin[segment - 1], dtype=float)
    edges = np.array([
        np.array(non_origin[segment - 1], dtype=float) - o,
        np.array(non_origin[segment], dtype=float) - o,
        np.array(origin[segment], dtype=float) - o,
    ]).T
    weights = np.linalg.solve(edges, np.array(point, dtype=float) - o)
    if np.any(weights < -tol) or np.sum(weights) > 1.0 + tol:
        return None
    return np.clip(weights, 0.0, 1.0)

def assign_incremental_point(info, origin, non_origin, point):
    """Set the formulation variables to represent `point`.

    Returns the active segment, or None if no segment contains `point`.
    """
    segments = len(origin) - 1
    for segment in range(1, segments + 1):
        weights = segment_weights(origin, non_origin, segment, point)
        if weights is None:
            continue
        for i in range(1, segments + 1):
            if i < segment:
                values = (0.0, 0.0, 1.0)
                z_bin = 1
            elif i == segment:
                values = weights
                z_bin = 0
            else:
                values = (0.0, 0.0, 0.0)
                z_bin = 0
            info.variables['delta_1'][i].set_value(float(values[0]))
            info.variables['delta_2'][i].set_value(float(values[1]))
            info.variables['delta_3'][i].set_value(float(values[2]))
            info.variables['z_bin'][i].set_value(z_bin)
        return segment
    return None

def variables_within_bounds(info, tol=TOL):
    for var in info.variables.values():
        for var_data in var.values():
            value = var_data.value
            if value is None:
                return False
            if var_data.has_lb() and value < var_data.lb - tol:
                return False
            if var_data.has_ub() and value > var_data.ub + tol:
                return False
    return True

def _linear_rows(block, index):
    """Return (coefficients, lower, upper) of each constraint in block."""
    rows = []
    for constraint in block.component_data_objects(pe.Constraint, active=True):
        repn = generate_standard_repn(constraint.body)
        assert repn.is_linear()
        coefs = np.zeros(len(index))
        for var, coef in zip(repn.linear_vars, repn.linear_coefs):
            coefs[index[id(var)]] += coef
        lower = None if not constraint.has_lb() else constraint.lb - repn.constant
        upper = None if not constraint.has_ub() else constraint.ub - repn.constant
        rows.append((coefs, lower, upper))
    return rows

def incremental_z_range(m, info, x, y):
    """Exact range of z allowed by the incremental formulation at (x, y).

    Fix every assignment of z_bin and solve the LPs min z and max z over
    the remaining continuous variables. Returns None if no assignment is
    feasible.
    """
    z_bin = info.variables['z_bin']
    variables = [m.x, m.y, m.z]
    for name in ['delta_1', 'delta_2', 'delta_3', 'z_bin']:
        variables.extend(info.variables[name].values())
    index = {id(var): i for i, var in enumerate(variables)}
    rows = _linear_rows(info.block, index)

    A_ub, b_ub, A_eq, b_eq = [], [], [], []
    for coefs, lower, upper in rows:
        if lower is not None and upper is not None and lower == upper:
            A_eq.append(coefs)
            b_eq.append(upper)
            continue
        if upper is not None:
            A_ub.append(coefs)
            b_ub.append(upper)
        if lower is not None:
            A_ub.append(-coefs)
            b_ub.append(-lower)

    c = np.zeros(len(variables))
    c[index[id(m.z)]] = 1.0

    lower, upper = None, None
    for pattern in itertools.product([0.0, 1.0], repeat=len(z_bin)):
        bounds = [(x, x), (y, y), (None, None)]
        bounds.extend((var.lb, var.ub) for var in variables[3:len(variables) - len(z_bin)])
        bounds.extend((value, value) for value in pattern)
        z_min = linprog(c, A_ub=A_ub or None, b_ub=b_ub or None,
                        A_eq=A_eq, b_eq=b_eq, bounds=bounds, method='highs')
        if z_min.status == 2:
            continue
        assert z_min.status == 0
        z_max = linprog(-c, A_ub=A_ub or None, b_ub=b_ub or None,
                        A_eq=A_eq, b_eq=b_eq, bounds=bounds, method='highs')
        assert z_max.status == 0
        lower = z_min.fun if lower is None else min(lower, z_min.fun)
        upper = -z_max.fun if upper is None else max(upper, -z_max.fun)
    if lower is None:
        return None
    return lower, upper
