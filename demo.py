"""
Walkthrough of array creation, reshaping, elementwise ops and matmul.
"""

import ndstride as nd

print("=" * 80)
print("ndstride demonstration")
print("=" * 80)

# 1. Creation
print("\n1. Array creation")
arr_f = nd.arange(1.0, 9.0, 1.0)
print("   1-D float array from 1.0 to 8.0:")
arr_f.show()
arr_i = nd.arange(-3, 4, 1)
print("   1-D int array from -3 to 3:")
arr_i.show(precision=0)
rand_arr = nd.random([2, 4], 2, seed=42)
print("   2x4 array of uniform random values:")
rand_arr.show()

# 2. Reshape and layout info
print("\n2. Reshaping the float array into a 2x4 matrix")
reshaped = nd.reshape_copy(arr_f, [2, 4], 2)
reshaped.show()
reshaped.print_info()

# 3. Elementwise operations
print("\n3. Elementwise operations")
a_add = nd.reshape_copy(nd.arange(1, 9, 1), [2, 4], 2)
b_add = nd.reshape_copy(nd.arange(10, 18, 1), [2, 4], 2)
print("   A + B:")
nd.add(a_add, b_add).show(precision=0)

a_bc = nd.reshape_copy(nd.arange(1.0, 4.0, 1.0), [1, 3], 2)
b_bc = nd.reshape_copy(nd.arange(1.0, 3.0, 1.0), [2, 1], 2)
print("   (1x3) + (2x1) broadcast to 2x3:")
nd.add(a_bc, b_bc).show()

a_mul = nd.reshape_copy(nd.arange(1, 5, 1), [2, 2], 2)
b_mul = nd.reshape_copy(nd.arange(5, 9, 1), [2, 2], 2)
print("   A * B:")
nd.multiply(a_mul, b_mul).show(precision=0)

# 4. Matrix multiplication
print("\n4. Matrix multiplication (2x3 @ 3x2)")
mat1 = nd.reshape_copy(nd.arange(1.0, 7.0, 1.0), [2, 3], 2)
mat2 = nd.reshape_copy(nd.arange(7.0, 13.0, 1.0), [3, 2], 2)
nd.matmul(mat1, mat2).show()

print("\n" + "=" * 80)
