import numpy as np
from mpfloat import new

PREC = 8  # bfloat16 significand

A0 = np.random.rand(6) # Random array in the range [0,1)
B0 = [new(PREC).set(float(x)) for x in A0] # Round into the emulated format.

# Find the max value.
max_val = max(B0)

# calculate exp(x-max) for each value.
shifted_exp = [new(PREC).exp(x - max_val) for x in B0]
exp_sum = sum(shifted_exp)

# calculate the softmax: [exp(x-max) / sum(exp(x-max))]
result = [float(x / exp_sum) for x in shifted_exp]
print("Calculated = ", result)

# NumPy's softmax.
np_softmax  = np.exp(A0 - np.max(A0)) / np.exp(A0 - np.max(A0)).sum()
print("Reference = ", np_softmax)
