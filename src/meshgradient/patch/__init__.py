"""
Bicubic Hermite (Ferguson) patch mathematics: the shared basis, the
per-patch coefficient matrices, and patch evaluation.
"""
