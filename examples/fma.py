import numpy as np
from mpfloat import RNDN, new

# Create two random numpy arrays in the range [0,1)
A0 = np.random.rand(1024)
A1 = np.random.rand(1024)

# Accumulate the dot product in 24 bits, once with a separate multiply and
# add (two roundings per step) and once with a fused multiply-add.
PREC = 24

B0 = [new(PREC).set(float(x)) for x in A0]
B1 = [new(PREC).set(float(x)) for x in A1]

acc, fused, prod = new(PREC).set(0), new(PREC).set(0), new(PREC)
for x, y in zip(B0, B1):
    acc.add(acc, prod.mul(x, y, RNDN))
    fused.fma(x, y, fused)

print("Using mul/add in fp24  : ", acc)
print("Using fma in fp24      : ", fused)
print("Using fp64 arithmetic  : ", np.dot(A0, A1))
