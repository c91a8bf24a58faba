"""
Utilitários compartilhados pelos testes
"""

from itertools import combinations

EPSILON = 1e-9


class FakeClock:
    """Relógio determinístico: avança `step` segundos a cada leitura"""

    def __init__(self, step: float = 0.0, start: float = 0.0):
        self.now = start
        self.step = step
        self.reads = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.reads += 1
        return value


def all_placements(result: dict):
    for sheet in result["sheets"]:
        for placement in sheet["placements"]:
            yield sheet["sheetNumber"], placement


def assert_valid_layout(test, result: dict, request: dict) -> None:
    """Verifica sobreposição, limites, conservação, rotação e kerf"""
    width = request["sheetWidth"]
    height = request["sheetHeight"]
    kerf = request.get("kerf", 0)

    for sheet in result["sheets"]:
        placements = sheet["placements"]
        for p in placements:
            test.assertGreaterEqual(p["x"], 0)
            test.assertGreaterEqual(p["y"], 0)
            test.assertLessEqual(p["x"] + p["placedWidth"], width + EPSILON)
            test.assertLessEqual(p["y"] + p["placedHeight"], height + EPSILON)

            if p["rotated"]:
                test.assertNotEqual(p["requestedWidth"], p["requestedHeight"])
                test.assertEqual(p["placedWidth"], p["requestedHeight"])
                test.assertEqual(p["placedHeight"], p["requestedWidth"])
            else:
                test.assertEqual(p["placedWidth"], p["requestedWidth"])
                test.assertEqual(p["placedHeight"], p["requestedHeight"])

        for a, b in combinations(placements, 2):
            gap_x = max(b["x"] - (a["x"] + a["placedWidth"]), a["x"] - (b["x"] + b["placedWidth"]))
            gap_y = max(b["y"] - (a["y"] + a["placedHeight"]), a["y"] - (b["y"] + b["placedHeight"]))
            test.assertTrue(
                gap_x >= kerf - EPSILON or gap_y >= kerf - EPSILON,
                f"Peças #{a['id']} e #{b['id']} sobrepostas ou sem kerf na chapa {sheet['sheetNumber']}",
            )

    expected = {}
    for cut in request["cuts"]:
        key = (cut["width"], cut["height"])
        expected[key] = expected.get(key, 0) + cut["quantity"]

    found = {}
    ids = []
    for _, p in all_placements(result):
        key = (p["requestedWidth"], p["requestedHeight"])
        found[key] = found.get(key, 0) + 1
        ids.append(p["id"])

    test.assertEqual(found, expected)
    test.assertEqual(len(ids), len(set(ids)))
    test.assertEqual(result["metrics"]["totalPiecesPlaced"], sum(expected.values()))
    test.assertEqual(result["sheetCount"], len(result["sheets"]))

    piece_area = sum(w * h * q for (w, h), q in expected.items())
    utilization = piece_area / (result["sheetCount"] * width * height) * 100
    test.assertAlmostEqual(result["metrics"]["utilizationPercent"], utilization, places=6)
