"""
bit_manipulation.py — Bit Manipulation Tricks
==============================================
A tour of classic bitwise idioms on the number 42 (0b00101010):
count set bits, power-of-two test, get/set/clear/toggle a bit, then
the XOR "single number" and XOR-swap tricks.

Bit positions are counted from the least significant bit (position 0).
`highlight_bits` indexes the *displayed* 8-bit string, left to right.
"""

from typing import Generator, List, Dict, Any

from algorithms.samples import BIT_NUMBER, BIT_WIDTH, SINGLE_NUMBER_ARRAY, XOR_SWAP_PAIR
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "bin(n).count('1')",                        # 0  count set bits
    "n > 0 and n & (n - 1) == 0",               # 1  power of two
    "(n >> k) & 1",                             # 2  get bit
    "n | (1 << k)",                             # 3  set bit
    "n & ~(1 << k)",                            # 4  clear bit
    "n ^ (1 << k)",                             # 5  toggle bit
    "reduce(xor, nums)",                        # 6  single number
    "a ^= b; b ^= a; a ^= b",                   # 7  xor swap
]


def _bits(n: int) -> str:
    return format(n & ((1 << BIT_WIDTH) - 1), f"0{BIT_WIDTH}b")


def _position(k: int) -> int:
    """Display index of bit k in an 8-char string."""
    return BIT_WIDTH - 1 - k


def bit_manipulation() -> Generator[Step, None, None]:
    n = BIT_NUMBER
    sb = StepBuilder(kind="bits")

    def show(name: str, value: Any, binary: str, highlight=(), original=None,
             operation: str = "", trace=()):
        sb.data.clear()
        payload: Dict[str, Any] = {
            "operation_name": name,
            "value": value,
            "binary": binary,
            "highlight_bits": list(highlight),
            "operation": operation,
            "trace": list(trace),
        }
        if original is not None:
            payload["original_binary"] = original
        sb.data.update(payload)

    show("Original number", n, _bits(n))
    yield sb.build(
        f"{n} in binary",
        f"The decimal number {n} is {_bits(n)} in binary. Every trick below "
        f"operates on these bits directly.",
    )

    ones = [i for i, b in enumerate(_bits(n)) if b == "1"]
    show("Count set bits", bin(n).count("1"), _bits(n), ones)
    sb.pseudocode_line = 0
    yield sb.build(
        f"{bin(n).count('1')} set bits",
        f"Count the 1s in {_bits(n)}: there are {bin(n).count('1')}.",
    )

    is_pow2 = n > 0 and n & (n - 1) == 0
    show("Is power of two", "Yes" if is_pow2 else "No", _bits(n), range(BIT_WIDTH),
         operation=f"{n} & ({n} - 1) = {_bits(n)} & {_bits(n - 1)} = {_bits(n & (n - 1))}")
    sb.pseudocode_line = 1
    yield sb.build(
        f"Power of two? {'Yes' if is_pow2 else 'No'}",
        "A power of two has exactly one bit set, so n & (n - 1) clears it to 0. "
        f"Here the result is {n & (n - 1)}, so {n} is {'' if is_pow2 else 'not '}a power of two.",
    )

    k = 3
    bit = (n >> k) & 1
    show(f"Get bit {k}", bit, _bits(n), [_position(k)],
         operation=f"({n} >> {k}) & 1 = {_bits(n >> k)} & 1 = {bit}")
    sb.pseudocode_line = 2
    yield sb.build(
        f"Bit {k} is {bit}",
        "Shift right to bring the bit to position 0, then AND with 1.",
    )

    k = 2
    result = n | (1 << k)
    show(f"Set bit {k}", result, _bits(result), [_position(k)], original=_bits(n),
         operation=f"{n} | (1 << {k}) = {_bits(n)} | {_bits(1 << k)} = {_bits(result)}")
    sb.pseudocode_line = 3
    yield sb.build(
        f"Set bit {k} → {result}",
        "OR with a mask that has only that bit set forces it to 1.",
    )

    k = 1
    result = n & ~(1 << k)
    show(f"Clear bit {k}", result, _bits(result), [_position(k)], original=_bits(n),
         operation=f"{n} & ~(1 << {k}) = {_bits(n)} & {_bits(~(1 << k))} = {_bits(result)}")
    sb.pseudocode_line = 4
    yield sb.build(
        f"Clear bit {k} → {result}",
        "AND with a mask that has every bit set except that one forces it to 0.",
    )

    k = 5
    result = n ^ (1 << k)
    show(f"Toggle bit {k}", result, _bits(result), [_position(k)], original=_bits(n),
         operation=f"{n} ^ (1 << {k}) = {_bits(n)} ^ {_bits(1 << k)} = {_bits(result)}")
    sb.pseudocode_line = 5
    yield sb.build(
        f"Toggle bit {k} → {result}",
        "XOR with a single-bit mask flips that bit and leaves the rest alone.",
    )

    nums = list(SINGLE_NUMBER_ARRAY)
    acc = nums[0]
    trace = []
    for x in nums[1:]:
        trace.append(f"{acc:b} ^ {x:b} = {acc ^ x:b}")
        acc ^= x
    show("Find single number", acc, _bits(acc),
         operation=" ^ ".join(str(x) for x in nums) + f" = {acc}", trace=trace)
    sb.pseudocode_line = 6
    yield sb.build(
        f"Single number is {acc}",
        f"In {nums} every value appears twice except one. x ^ x = 0, so XOR-ing "
        f"everything cancels the pairs and leaves {acc}.",
    )

    a, b = XOR_SWAP_PAIR
    trace = []
    a ^= b
    trace.append(f"a = a ^ b = {a}")
    b ^= a
    trace.append(f"b = b ^ a = {b}")
    a ^= b
    trace.append(f"a = a ^ b = {a}")
    show("Swap without temp", f"a={a}, b={b}", "",
         operation="a ^= b; b ^= a; a ^= b", trace=trace)
    sb.pseudocode_line = 7
    yield sb.build(
        f"Swapped: a={a}, b={b}",
        f"Three XORs swap a={XOR_SWAP_PAIR[0]} and b={XOR_SWAP_PAIR[1]} "
        f"without a temporary variable.",
        is_final=True,
    )
