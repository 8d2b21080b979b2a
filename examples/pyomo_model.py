import pyomo.environ as pe


def get_pyomo_model(*args, **kwargs):
    """ Returns an example Pyomo model with a bilinear term. """
    m = pe.ConcreteModel()

    m.x = pe.Var(bounds=(0, 4))
    m.y = pe.Var(bounds=(1, 3))
    m.w = pe.Var()

    m.obj = pe.Objective(expr=m.w - m.x, sense=pe.minimize)

    m.lin = pe.Constraint(expr=m.x + m.y <= 5)

    return m


if __name__ == '__main__':
    from bilinrelax import BilinearRelaxer

    relaxer = BilinearRelaxer()
    relaxer.update_configuration({
        'logging': {
            'level': 'DEBUG',
            'stdout': True,
        },
    })

    model = get_pyomo_model()
    # w = x*y over 4 segments of x
    info = relaxer.relax(model, model.x, model.y, model.w, x_partition=[0, 1, 2, 3, 4])
    print(info)
    model.pprint()
