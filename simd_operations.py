"""
JIT-compiled kernels for polynomial arithmetic over word-size prime fields.

Polynomials over F_p with p < 2^31 are handed to these kernels as int64
coefficient arrays (index = exponent). Every product of two reduced
residues fits in 63 bits, so the kernels reduce after each multiply-add and
never overflow.

OPTIMIZATION TARGETS:
1. Polynomial product mod p: Numba JIT convolution
2. Division with remainder mod p: Numba JIT long division
3. Null space mod p: Numba JIT Gauss-Jordan elimination (Berlekamp Q-matrix)
"""

import numpy as np
from numba import njit


# ============================================================================
# PART 1: SCALAR HELPERS
# ============================================================================

@njit
def _inv_mod_simd(a: int, p: int) -> int:
    """
    Modular inverse by the extended Euclidean algorithm.

    Args:
        a: Residue, must be nonzero mod p
        p: Prime modulus

    Returns:
        a^-1 mod p
    """
    t = 0
    new_t = 1
    r = p
    new_r = a % p
    while new_r != 0:
        q = r // new_r
        t, new_t = new_t, t - q * new_t
        r, new_r = new_r, r - q * new_r
    if t < 0:
        t += p
    return t


# ============================================================================
# PART 2: POLYNOMIAL PRODUCT AND REMAINDER
# ============================================================================

@njit
def _poly_mul_mod_simd(a: np.ndarray, b: np.ndarray, p: int) -> np.ndarray:
    """
    Convolution of two coefficient arrays modulo p.

    Args:
        a: Coefficients of the first factor, reduced mod p (int64)
        b: Coefficients of the second factor, reduced mod p (int64)
        p: Prime modulus below 2^31

    Returns:
        Coefficients of a * b mod p (length len(a) + len(b) - 1)
    """
    n = a.shape[0]
    m = b.shape[0]
    out = np.zeros(n + m - 1, dtype=np.int64)
    for i in range(n):
        ai = a[i]
        if ai == 0:
            continue
        for j in range(m):
            out[i + j] = (out[i + j] + ai * b[j]) % p
    return out


@njit
def _poly_divmod_mod_simd(a: np.ndarray, b: np.ndarray, p: int):
    """
    Long division a = q * b + r over F_p.

    Caller guarantees len(a) >= len(b) >= 1 and b[-1] != 0.

    Returns:
        (q, r) coefficient arrays; r has length len(b) - 1
    """
    n = a.shape[0]
    m = b.shape[0]
    inv_lc = _inv_mod_simd(b[m - 1], p)
    r = a.copy()
    q = np.zeros(n - m + 1, dtype=np.int64)
    for k in range(n - m, -1, -1):
        c = (r[k + m - 1] * inv_lc) % p
        q[k] = c
        if c != 0:
            for j in range(m):
                r[k + j] = (r[k + j] + p - (c * b[j]) % p) % p
    return q, r[:m - 1].copy()


# ============================================================================
# PART 3: NULL SPACE (Gauss-Jordan over F_p)
# ============================================================================

@njit
def _nullspace_mod_p_simd(matrix: np.ndarray, p: int) -> np.ndarray:
    """
    Basis of the right null space {v : matrix @ v == 0 mod p}.

    Reduces a copy of the matrix to reduced row echelon form; every non-pivot
    column contributes one basis vector.

    Args:
        matrix: Square or rectangular int64 matrix with entries in [0, p)
        p: Prime modulus below 2^31

    Returns:
        int64 array of shape (nullity, columns), one basis vector per row
    """
    A = matrix.copy()
    rows = A.shape[0]
    cols = A.shape[1]
    pivot_cols = np.full(rows, -1, dtype=np.int64)
    r = 0
    for c in range(cols):
        if r >= rows:
            break
        pivot = -1
        for i in range(r, rows):
            if A[i, c] != 0:
                pivot = i
                break
        if pivot == -1:
            continue
        if pivot != r:
            tmp = A[r, :].copy()
            A[r, :] = A[pivot, :]
            A[pivot, :] = tmp
        inv = _inv_mod_simd(A[r, c], p)
        for j in range(cols):
            A[r, j] = (A[r, j] * inv) % p
        for i in range(rows):
            if i != r and A[i, c] != 0:
                f = A[i, c]
                for j in range(cols):
                    A[i, j] = (A[i, j] + p - (f * A[r, j]) % p) % p
        pivot_cols[r] = c
        r += 1

    rank = r
    is_pivot = np.zeros(cols, dtype=np.bool_)
    for i in range(rank):
        is_pivot[pivot_cols[i]] = True

    basis = np.zeros((cols - rank, cols), dtype=np.int64)
    k = 0
    for free in range(cols):
        if is_pivot[free]:
            continue
        basis[k, free] = 1
        for i in range(rank):
            basis[k, pivot_cols[i]] = (p - A[i, free]) % p
        k += 1
    return basis
