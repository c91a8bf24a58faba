"""
Testes da API FastAPI
"""

import time
import unittest

from fastapi.testclient import TestClient

import main
from tests.helpers import assert_valid_layout

SCENARIO_A = {
    "sheetWidth": 2440, "sheetHeight": 1830, "kerf": 0,
    "cuts": [{"width": 1000, "height": 500, "quantity": 4}],
}


class TestApi(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        main.worker.config = main.worker.config.model_copy(update={"time_limit_per_sheet_ms": 50})
        cls.client = TestClient(main.app)

    def wait_for_job(self, job_id):
        status = None
        for _ in range(100):
            status = self.client.get(f"/jobs/{job_id}").json()
            if status["state"] == "done":
                break
            time.sleep(0.05)
        return status

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_pack_success(self):
        response = self.client.post("/pack", json=SCENARIO_A)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["result"]["sheetCount"], 1)
        assert_valid_layout(self, body["result"], SCENARIO_A)

    def test_pack_piece_too_large(self):
        response = self.client.post("/pack", json={
            "sheetWidth": 1000, "sheetHeight": 1000,
            "cuts": [{"width": 1200, "height": 1200, "quantity": 1}],
        })

        self.assertEqual(response.status_code, 422)
        body = response.json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(body["errorType"], "piece_too_large")
        self.assertIn("1200x1200", body["message"])

    def test_pack_rejects_malformed_request(self):
        response = self.client.post("/pack", json={
            "sheetWidth": 1000, "sheetHeight": 1000,
            "cuts": [{"width": 100, "height": 100, "quantity": 0}],
        })
        self.assertEqual(response.status_code, 422)

        body = response.json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(body["errorType"], "validation")
        self.assertIn("quantity", body["message"])
        self.assertNotIn("detail", body)

    def test_job_with_malformed_request_reports_validation_error(self):
        job_id = self.client.post("/jobs", json={"sheetWidth": -1}).json()["jobId"]

        status = self.wait_for_job(job_id)

        self.assertEqual(status["response"]["status"], "error")
        self.assertEqual(status["response"]["errorType"], "validation")

    def test_job_lifecycle(self):
        response = self.client.post("/jobs", json=SCENARIO_A)
        self.assertEqual(response.status_code, 200)
        job_id = response.json()["jobId"]

        status = self.wait_for_job(job_id)

        self.assertEqual(status["state"], "done")
        self.assertEqual(status["response"]["status"], "success")
        assert_valid_layout(self, status["response"]["result"], SCENARIO_A)

    def test_finished_job_is_removed_after_read(self):
        job_ids = [self.client.post("/jobs", json=SCENARIO_A).json()["jobId"] for _ in range(3)]

        for job_id in job_ids:
            self.assertEqual(self.wait_for_job(job_id)["state"], "done")

        for job_id in job_ids:
            self.assertNotIn(job_id, main.jobs)
            self.assertEqual(self.client.get(f"/jobs/{job_id}").status_code, 404)

    def test_unknown_job(self):
        self.assertEqual(self.client.get("/jobs/desconhecido").status_code, 404)

    def test_text_report(self):
        result = self.client.post("/pack", json=SCENARIO_A).json()["result"]

        response = self.client.post("/report/text", json=result)

        self.assertEqual(response.status_code, 200)
        self.assertIn("RELATÓRIO DE PLANO DE CORTE", response.text)
        self.assertIn("Chapas Utilizadas: 1", response.text)

    def test_example_request_is_packable(self):
        example = self.client.get("/examples").json()

        response = self.client.post("/pack", json=example)

        self.assertEqual(response.status_code, 200)
        assert_valid_layout(self, response.json()["result"], example)


if __name__ == "__main__":
    unittest.main()
