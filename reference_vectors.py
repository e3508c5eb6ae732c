"""
Reference test vectors.

POSEIDON4_VECTORS are digests produced by the off-chain reference library
(poseidon-bls12381). DO NOT MODIFY - values must match the reference exactly.

POSEIDON2_VECTORS, POSEIDON1_VECTORS and TABLE_ANCHORS pin the width-3 and
width-2 instances as shipped in primitives/tables. They were computed from
those tables, which come from the same generator that reproduces the
POSEIDON4_VECTORS; any change to the tables or the round schedule moves them.

The remaining input sets have no pinned digest; they are used to check that
every implementation (loop core, batch, unrolled program, rendered Python)
agrees and stays in range near the modulus.
"""

from typing import Dict, List, Tuple

from hashing.sponge import hash_1, hash_2, hash_4
from primitives.field import BLS12_381_SCALAR_PRIME

P = BLS12_381_SCALAR_PRIME

# poseidon4([w, x, y, z]) -> digest
POSEIDON4_VECTORS: List[Tuple[Tuple[int, int, int, int], int]] = [
    ((0, 0, 0, 0), 13414013329667544728247370350271255543326139971590598177275881238397992759743),
    ((1, 2, 3, 4), 21145329782224435656281698581333264404190182101555512590871803982657985796198),
]

# poseidon2([x, y]) -> digest, including the modulus boundary
POSEIDON2_VECTORS: List[Tuple[Tuple[int, int], int]] = [
    ((0, 0), 51576823595707970152643159819788304363803754756066229172775779360774743019614),
    ((1, 2), 28821147804331559602169231704816259064962739503761913593647409715501647586810),
    ((P - 1, 0), 13451459153536653361510553130257644108045687739609501036166779564320463592304),
    ((P // 2, P // 2), 21974744771099000400389149603380124028797258807511527226656594715144490400785),
    ((0, P - 1), 11931062952202734020022834427105421987472777207575496363712940271575442059117),
]

# poseidon1([x]) -> digest
POSEIDON1_VECTORS: List[Tuple[Tuple[int], int]] = [
    ((0,), 2811068068091031911201269074038037779542827974520177560187358960284013358662),
    ((1,), 33312903538086167554741214005086116725441315171650202128840830167854170336490),
]

# width -> first round constant, last round constant, first MDS row
TABLE_ANCHORS: Dict[int, Dict[str, object]] = {
    2: {
        "first_constant": 44510337639712444877093863969199054965277800588455612249278638908194748645831,
        "last_constant": 1395088935948449734081725164592118911882208841378506321094899799193420360392,
        "mds_row_0": (
            13762060464556900211581737620419199890287040870619655689227202315814160876136,
            8255154215940922532370880873349015486813371684479251358050246554874449402829,
        ),
    },
    3: {
        "first_constant": 50207570499218320245539736680169582180207201335688461025883902752909290481781,
        "last_constant": 8986959445646103225184427425621185795926770872760594291948007853933732792000,
        "mds_row_0": (
            31132615691953054007607965980645648176597305574689507130935554116487006357561,
            28902801205828158269279400851197449199863789284082006023033158644548465111632,
            45143210059012869677729928361749392446841468455419349336638033647131514405081,
        ),
    },
}

# Two-input cases exercised against the reference contract
POSEIDON2_INPUTS: List[Tuple[int, int]] = [
    (0, 0),
    (1, 2),
    (123, 456),
    (123456789, 987654321),
    (0x1234567890ABCDEF, 0xFEDCBA0987654321),
    (P - 1, 1),
    (2**64, 2**128),
]

POSEIDON2_BOUNDARY_INPUTS: List[Tuple[int, int]] = [
    (P - 1, 0),
    (0, P - 1),
    (P - 1, P - 1),
    (P // 2, P // 2),
]

POSEIDON4_INPUTS: List[Tuple[int, int, int, int]] = [
    (123, 456, 789, 101112),
    (0xFFFFFFFFFFFFFFFF, 0x123456789ABCDEF0, 999, 888),
    (P - 1, 1, 2, 3),
    (999999999999999, 888888888888888, 777777777777777, 666666666666666),
]


def get_poseidon4_vectors() -> List[Tuple[Tuple[int, int, int, int], int]]:
    return list(POSEIDON4_VECTORS)


def check_vectors() -> List[Tuple[str, Tuple[int, ...], int, int]]:
    """Recompute every pinned digest.

    Returns:
        (function name, inputs, expected, actual) for each vector
    """
    results = []
    for name, fn, vectors in (
        ("poseidon1", hash_1, POSEIDON1_VECTORS),
        ("poseidon2", hash_2, POSEIDON2_VECTORS),
        ("poseidon4", hash_4, POSEIDON4_VECTORS),
    ):
        for inputs, expected in vectors:
            results.append((name, inputs, expected, fn(*inputs)))
    return results
