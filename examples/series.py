# Sum of 1/i! for i = 1..100, rounded down, as in the MPFR sample program.
import mpfloat
from mpfloat import RNDD, RNDU

mpfloat.set_default_prec(200)
mpfloat.set_default_rounding_mode(RNDD)

s, t, u = mpfloat.new(), mpfloat.new(), mpfloat.new()

s.set(1)
t.set(1)

for i in range(1, 101):
    u.div(u.set(1), t.mul(t, i, RNDU))
    s.add(s, u)

print("sum is", s)
