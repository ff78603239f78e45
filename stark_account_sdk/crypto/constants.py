"""
Constants for the Stark elliptic curve.

y^2 = x^3 + ALPHA * x + BETA over the field of FIELD_PRIME elements.
"""
from ..felt import FIELD_PRIME

ALPHA = 1
BETA = 0x6F21413EFBE40DE150E596D72F7A8C5609AD26C15C915C1F4CDFCB99CEE9E89

# Order of the generator point (N value)
EC_ORDER = 0x800000000000010FFFFFFFFFFFFFFFFB781126DCAE7B2321E66A241ADC64D2F

EC_GEN = (
    0x1EF15C18599971B7BECED415A40F0C7DEACFD9B0D1819E03D723D8BC943CFCA,
    0x5668060AA49730B7BE4801DF46EC62DE53ECD11ABE43A32873000C36E8DC1F,
)

# Signable message hashes and valid r / w values are below 2**251
N_ELEMENT_BITS_ECDSA = 251

# Each Pedersen input is split into a 248-bit low part and a 4-bit high part
N_ELEMENT_BITS_HASH = 252
LOW_PART_BITS = 248
LOW_PART_MASK = 2**LOW_PART_BITS - 1

# Pedersen shift point followed by the four base points P1..P4
PEDERSEN_SHIFT_POINT = (
    0x49EE3EBA8C1600700EE1B87EB599F16716B0B1022947733551FDE4050CA6804,
    0x3CA0CFE4B3BC6DDF346D49D06EA0ED34E621062C0E056C1D0405D266E10268A,
)
PEDERSEN_P1 = (
    0x234287DCBAFFE7F969C748655FCA9E58FA8120B6D56EB0C1080D17957EBE47B,
    0x3B056F100F96FB21E889527D41F4E39940135DD7A6C94CC6ED0268EE89E5615,
)
PEDERSEN_P2 = (
    0x4FA56F376C83DB33F9DAB2656558F3399099EC1DE5E3018B7A6932DBA8AA378,
    0x3FA0984C931C9E38113E0C0E47E4401562761F92A7A23B45168F4E80FF5B54D,
)
PEDERSEN_P3 = (
    0x4BA4CC166BE8DEC764910F75B45F74B40C690C74709E90F3AA372F0BD2D6997,
    0x40301CF5C1751F4B971E46C4EDE85FCAC5C59A5CE5AE7C48151F27B24B219C,
)
PEDERSEN_P4 = (
    0x54302DCB0E6CC1C6E44CCA8F61A63BB2CA65048D53FB325D36FF12C49A58202,
    0x1B77B3E37D13504B348046268D8AE25CE98AD783C25561A879DCC77E99C2426,
)

__all__ = [
    "FIELD_PRIME", "ALPHA", "BETA", "EC_ORDER", "EC_GEN",
    "N_ELEMENT_BITS_ECDSA", "N_ELEMENT_BITS_HASH", "LOW_PART_BITS", "LOW_PART_MASK",
    "PEDERSEN_SHIFT_POINT", "PEDERSEN_P1", "PEDERSEN_P2", "PEDERSEN_P3", "PEDERSEN_P4",
]
