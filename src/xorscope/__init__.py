"""
xorscope - statistical cryptanalysis of classical XOR ciphers and ECB mode
"""

__version__ = "1.0.0"
