def pairs(xs):
    ''' Walk a flat list two items at a time: [a, b, c, d] -> (a, b), (c, d).
    '''
    it = iter(xs)
    return zip(it, it)

def select_keys(m, ks): return { k: m.get(k) for k in ks if m.get(k) != None}
