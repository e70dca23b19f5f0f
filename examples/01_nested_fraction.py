import fracmat as fm

# (2/3) / (2/3) collapses to 1
print(fm.Fraction(fm.Fraction(2, 3), fm.Fraction(2, 3)))

m = fm.Matrix[float, 5].from_rows([
    [0, 0, 1, 1, 1],
    [1, 0, 0, 1, 1],
    [0, 1, 1, 0, 0],
    [0, 0, 0, 1, 1],
    [1, 1, 0, 1, 0],
])
print(m)
print('det =', m.det())
if m.is_invertible():
    print(m.inverse())
