import math

from mpfloat import RNDD, new

# compute the first N digits of pi.
N = 1000
prec = math.ceil(math.log2(10) * N + 1)
x = new(prec).const_pi()
print(x.tostring(10, N, RNDD))
