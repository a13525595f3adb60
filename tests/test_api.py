# tests/test_api.py
"""End-to-end tests for the v1 HTTP API against an in-memory database."""

import uuid

BASE = "/api/v1"

BUSINESS = {
    "name": "Acme Traders",
    "gstin": "27AAPFU0939F1ZV",
    "business_type": "proprietor",
    "address": "12 MG Road",
    "city": "Pune",
    "state": "Maharashtra",
    "state_code": "27",
    "pincode": "411001",
}

LINE = {"description": "Consulting", "quantity": 2, "rate": 1000, "gst_rate": 18}


async def _business(client) -> str:
    resp = await client.post(f"{BASE}/businesses", json=BUSINESS)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["id"]


async def _customer(client, business_id, state_code="27", **extra) -> str:
    body = {"name": "Buyer", "state_code": state_code, **extra}
    resp = await client.post(f"{BASE}/businesses/{business_id}/customers", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["id"]


async def _vendor(client, business_id, state_code="27", gstin="27AABCU9603R1ZM") -> str:
    body = {"name": "Supplier", "state_code": state_code, "gstin": gstin}
    resp = await client.post(f"{BASE}/businesses/{business_id}/vendors", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["id"]


async def _invoice(client, business_id, customer_id, invoice_date="2024-04-10", items=None, **extra):
    body = {
        "customer_id": customer_id,
        "invoice_date": invoice_date,
        "items": items or [LINE],
        **extra,
    }
    return await client.post(f"{BASE}/businesses/{business_id}/invoices", json=body)


async def _purchase(client, business_id, vendor_id, invoice_date="2024-04-12", **extra):
    body = {
        "vendor_id": vendor_id,
        "invoice_number": "SUP-77",
        "invoice_date": invoice_date,
        "items": [{"description": "Laptop", "quantity": 1, "rate": 1000, "gst_rate": 18}],
        **extra,
    }
    return await client.post(f"{BASE}/businesses/{business_id}/purchases", json=body)


async def _filing(client, business_id, return_type="GSTR-3B", period="042024"):
    return await client.post(
        f"{BASE}/businesses/{business_id}/filing-returns",
        json={"return_type": return_type, "period": period},
    )


class TestBusinesses:

    def test_create_and_fetch_business(self, api):
        async def scenario(client):
            business_id = await _business(client)
            resp = await client.get(f"{BASE}/businesses/{business_id}")
            assert resp.status_code == 200
            body = resp.json()
            assert body["status"] == "ok"
            assert body["data"]["gstin"] == "27AAPFU0939F1ZV"

            resp = await client.patch(f"{BASE}/businesses/{business_id}", json={"city": "Mumbai"})
            assert resp.json()["data"]["city"] == "Mumbai"

        api(scenario)

    def test_invalid_gstin_rejected(self, api):
        async def scenario(client):
            resp = await client.post(f"{BASE}/businesses", json={**BUSINESS, "gstin": "BAD"})
            assert resp.status_code == 422
            body = resp.json()
            assert body["status"] == "error"
            assert body["message"] == "Validation failed"
            assert body["errors"]

        api(scenario)

    def test_unknown_business_is_404(self, api):
        async def scenario(client):
            resp = await client.get(f"{BASE}/businesses/{uuid.uuid4()}/invoices")
            assert resp.status_code == 404
            assert resp.json() == {
                "status": "error", "data": None, "message": "Business not found", "errors": None,
            }

        api(scenario)

    def test_customer_state_name_filled_from_code(self, api):
        async def scenario(client):
            business_id = await _business(client)
            await _customer(client, business_id, state_code="29")
            resp = await client.get(f"{BASE}/businesses/{business_id}/customers")
            assert resp.json()["data"][0]["state"] == "Karnataka"

        api(scenario)


class TestInvoices:

    def test_intra_state_invoice_totals(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id, state_code="27")
            resp = await _invoice(client, business_id, customer_id)
            assert resp.status_code == 201, resp.text
            data = resp.json()["data"]
            assert data["invoice_number"] == "INV-0001"
            assert data["tax_treatment"] == "intra_state"
            assert data["is_inter_state"] is False
            assert data["subtotal"] == 2000.0
            assert data["total_cgst"] == 180.0
            assert data["total_sgst"] == 180.0
            assert data["total_igst"] == 0.0
            assert data["total_amount"] == 2360.0
            assert data["place_of_supply"] == "Maharashtra"
            assert data["amount_in_words"] == "Rupees Two Thousand Three Hundred Sixty Only"
            assert data["items"][0]["cgst_amount"] == 180.0

        api(scenario)

    def test_inter_state_invoice_uses_igst(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id, state_code="29")
            data = (await _invoice(client, business_id, customer_id)).json()["data"]
            assert data["tax_treatment"] == "inter_state"
            assert data["total_cgst"] == 0.0
            assert data["total_igst"] == 360.0
            assert data["total_amount"] == 2360.0

        api(scenario)

    def test_bill_of_supply_has_no_tax(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            resp = await _invoice(client, business_id, customer_id, invoice_type="bill_of_supply")
            data = resp.json()["data"]
            assert data["tax_treatment"] == "no_gst"
            assert data["total_amount"] == 2000.0

        api(scenario)

    def test_invoice_numbers_are_sequential_and_unique(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            await _invoice(client, business_id, customer_id)

            resp = await client.get(f"{BASE}/businesses/{business_id}/invoices/next-number")
            assert resp.json()["data"] == {"last_number": 1, "next_invoice_number": "INV-0002"}

            second = await _invoice(client, business_id, customer_id)
            assert second.json()["data"]["invoice_number"] == "INV-0002"

            dup = await _invoice(client, business_id, customer_id, invoice_number="INV-0001")
            assert dup.status_code == 409

        api(scenario)

    def test_unknown_customer_is_404(self, api):
        async def scenario(client):
            business_id = await _business(client)
            resp = await _invoice(client, business_id, str(uuid.uuid4()))
            assert resp.status_code == 404
            assert resp.json()["message"] == "Customer not found"

        api(scenario)

    def test_rate_outside_schedule_is_422(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            resp = await _invoice(client, business_id, customer_id, items=[{**LINE, "gst_rate": 7}])
            assert resp.status_code == 422

        api(scenario)

    def test_update_recomputes_totals(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            invoice_id = (await _invoice(client, business_id, customer_id)).json()["data"]["id"]

            resp = await client.patch(
                f"{BASE}/businesses/{business_id}/invoices/{invoice_id}",
                json={"items": [{**LINE, "quantity": 3}], "status": "sent"},
            )
            assert resp.status_code == 200, resp.text
            data = resp.json()["data"]
            assert data["total_amount"] == 3540.0
            assert data["status"] == "sent"
            assert data["invoice_number"] == "INV-0001"

        api(scenario)

    def test_list_is_paginated(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            for day in (1, 2, 3):
                await _invoice(client, business_id, customer_id, invoice_date=f"2024-04-0{day}")

            resp = await client.get(f"{BASE}/businesses/{business_id}/invoices?limit=2")
            page = resp.json()["data"]
            assert page["total"] == 3
            assert page["has_more"] is True
            assert [i["invoice_date"] for i in page["items"]] == ["2024-04-03", "2024-04-02"]

        api(scenario)

    def test_list_pages_in_the_database(self, api, monkeypatch):
        from gst_compliance.infrastructure.db.repositories.invoice_repository import InvoiceRepository

        async def load_everything(self, business_id):
            raise AssertionError("listing must not load every invoice")

        monkeypatch.setattr(InvoiceRepository, "list_for_business", load_everything)

        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            for day in (1, 2, 3, 4, 5):
                await _invoice(client, business_id, customer_id, invoice_date=f"2024-04-0{day}")

            url = f"{BASE}/businesses/{business_id}/invoices"
            middle = (await client.get(url, params={"limit": 2, "offset": 2})).json()["data"]
            assert middle["total"] == 5
            assert middle["has_more"] is True
            assert [i["invoice_date"] for i in middle["items"]] == ["2024-04-03", "2024-04-02"]

            last = (await client.get(url, params={"limit": 2, "offset": 4})).json()["data"]
            assert [i["invoice_date"] for i in last["items"]] == ["2024-04-01"]
            assert last["has_more"] is False

        api(scenario)


class TestPurchases:

    def test_partial_itc_splits_eligible_and_blocked(self, api):
        async def scenario(client):
            business_id = await _business(client)
            vendor_id = await _vendor(client, business_id)
            resp = await _purchase(client, business_id, vendor_id, itc_eligibility="partial")
            assert resp.status_code == 201, resp.text
            data = resp.json()["data"]
            assert data["tax_treatment"] == "intra_state"
            assert data["total_cgst"] == 90.0
            assert data["itc_eligible"] == 90.0
            assert data["itc_blocked"] == 90.0
            assert data["gstr2b_status"] == "pending"

        api(scenario)

    def test_out_of_state_vendor_is_inter_state(self, api):
        async def scenario(client):
            business_id = await _business(client)
            vendor_id = await _vendor(client, business_id, state_code="29", gstin="29AABCU9603R1ZM")
            data = (await _purchase(client, business_id, vendor_id)).json()["data"]
            assert data["total_igst"] == 180.0

        api(scenario)

    def test_reconcile_2b(self, api):
        async def scenario(client):
            business_id = await _business(client)
            registered = await _vendor(client, business_id)
            unregistered = await _vendor(client, business_id, gstin=None)
            await _purchase(client, business_id, registered)
            await _purchase(client, business_id, unregistered)

            resp = await client.post(f"{BASE}/businesses/{business_id}/purchases/reconcile")
            assert resp.status_code == 200
            assert resp.json()["data"] == {
                "message": "Reconciliation complete", "matched": 1, "not_found": 1, "skipped": 0,
            }

            listed = (await client.get(f"{BASE}/businesses/{business_id}/purchases")).json()["data"]["items"]
            assert sorted(p["gstr2b_status"] for p in listed) == ["matched", "not_found"]

        api(scenario)

    def test_list_pages_in_the_database(self, api):
        async def scenario(client):
            business_id = await _business(client)
            vendor_id = await _vendor(client, business_id)
            for day in (10, 11, 12):
                await _purchase(client, business_id, vendor_id, invoice_date=f"2024-04-{day}")

            url = f"{BASE}/businesses/{business_id}/purchases"
            page = (await client.get(url, params={"limit": 1, "offset": 1})).json()["data"]
            assert page["total"] == 3
            assert page["has_more"] is True
            assert [p["invoice_date"] for p in page["items"]] == ["2024-04-11"]

        api(scenario)


class TestLiabilityAndFiling:

    def test_period_liability_nets_per_head(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            vendor_id = await _vendor(client, business_id)
            await _invoice(client, business_id, customer_id)
            await _purchase(client, business_id, vendor_id)
            await _invoice(client, business_id, customer_id, invoice_date="2024-05-01")

            resp = await client.get(f"{BASE}/businesses/{business_id}/tax-liability/042024")
            data = resp.json()["data"]
            assert data["invoice_count"] == 1
            assert data["purchase_count"] == 1
            assert data["net_cgst"] == 90.0
            assert data["net_sgst"] == 90.0
            assert data["total_payable"] == 180.0
            assert data["itc_available"] == 180.0

        api(scenario)

    def test_invalid_period_is_400(self, api):
        async def scenario(client):
            business_id = await _business(client)
            resp = await client.get(f"{BASE}/businesses/{business_id}/tax-liability/132024")
            assert resp.status_code == 400
            assert resp.json()["status"] == "error"

        api(scenario)

    def test_out_of_range_year_is_400(self, api):
        async def scenario(client):
            business_id = await _business(client)
            for period in ("010000", "129999"):
                resp = await client.get(f"{BASE}/businesses/{business_id}/tax-liability/{period}")
                assert resp.status_code == 400, period

        api(scenario)

    def test_filing_with_out_of_range_year_is_422(self, api):
        async def scenario(client):
            business_id = await _business(client)
            for period in ("129999", "010000"):
                resp = await _filing(client, business_id, return_type="GSTR-1", period=period)
                assert resp.status_code == 422, period
                assert resp.json()["status"] == "error"

        api(scenario)

    def test_filing_gets_statutory_due_date(self, api):
        async def scenario(client):
            business_id = await _business(client)
            resp = await _filing(client, business_id)
            assert resp.status_code == 201
            data = resp.json()["data"]
            assert data["due_date"] == "2024-05-20"
            assert data["status"] == "pending"

            assert (await _filing(client, business_id)).status_code == 409
            bad = await _filing(client, business_id, period="2024-04")
            assert bad.status_code == 422

        api(scenario)

    def test_auto_populate_files_and_locks_period(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            vendor_id = await _vendor(client, business_id)
            invoice_id = (await _invoice(client, business_id, customer_id)).json()["data"]["id"]
            await _purchase(client, business_id, vendor_id)
            filing_id = (await _filing(client, business_id)).json()["data"]["id"]

            url = f"{BASE}/businesses/{business_id}/filing-returns/{filing_id}"
            resp = await client.post(f"{url}/auto-populate")
            assert resp.status_code == 200, resp.text
            body = resp.json()
            assert body["message"] == "Return auto-populated and filed"
            assert body["data"]["status"] == "filed"
            assert body["data"]["tax_liability"] == 180.0
            assert body["data"]["itc_claimed"] == 180.0
            assert body["data"]["json_data"]["net_payable"] == 180.0
            assert body["data"]["late_fee"] == 5000.0

            again = await client.post(f"{url}/file-nil")
            assert again.status_code == 400

            locked = await _invoice(client, business_id, customer_id, invoice_date="2024-04-25")
            assert locked.status_code == 409
            assert "locked" in locked.json()["message"]

            deleted = await client.delete(f"{BASE}/businesses/{business_id}/invoices/{invoice_id}")
            assert deleted.status_code == 409

            next_month = await _invoice(client, business_id, customer_id, invoice_date="2024-05-02")
            assert next_month.status_code == 201

        api(scenario)

    def test_filed_annual_return_locks_the_financial_year(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            created = await _filing(client, business_id, return_type="GSTR-9", period="042024")
            filing_id = created.json()["data"]["id"]
            filed = await client.post(f"{BASE}/businesses/{business_id}/filing-returns/{filing_id}/file-nil")
            assert filed.status_code == 200, filed.text

            late_in_year = await _invoice(client, business_id, customer_id, invoice_date="2025-02-10")
            assert late_in_year.status_code == 409

            next_year = await _invoice(client, business_id, customer_id, invoice_date="2025-04-01")
            assert next_year.status_code == 201

        api(scenario)

    def test_nil_return(self, api):
        async def scenario(client):
            business_id = await _business(client)
            filing_id = (await _filing(client, business_id, "GSTR-1", "032024")).json()["data"]["id"]
            resp = await client.post(
                f"{BASE}/businesses/{business_id}/filing-returns/{filing_id}/file-nil"
            )
            data = resp.json()["data"]
            assert data["status"] == "filed"
            assert data["tax_liability"] == 0.0
            assert data["json_data"] == {"is_nil_return": True}

        api(scenario)


class TestPayments:

    def test_challan_total_and_summary(self, api):
        async def scenario(client):
            business_id = await _business(client)
            filing_id = (await _filing(client, business_id)).json()["data"]["id"]
            resp = await client.post(
                f"{BASE}/businesses/{business_id}/payments",
                json={
                    "filing_return_id": filing_id,
                    "challan_number": "CPIN-1",
                    "challan_date": "2024-05-18",
                    "cgst": 90, "sgst": 90, "interest": 10,
                    "itc_cgst_used": 40,
                },
            )
            assert resp.status_code == 201, resp.text
            assert resp.json()["data"]["total_amount"] == 190.0

            summary = (await client.get(f"{BASE}/businesses/{business_id}/payments/summary")).json()["data"]
            assert summary["payment_count"] == 1
            assert summary["total_pending"] == 190.0
            assert summary["itc_utilized"]["cgst"] == 40.0

        api(scenario)

    def test_unknown_filing_is_404(self, api):
        async def scenario(client):
            business_id = await _business(client)
            resp = await client.post(
                f"{BASE}/businesses/{business_id}/payments",
                json={"filing_return_id": str(uuid.uuid4()), "cgst": 1},
            )
            assert resp.status_code == 404

        api(scenario)


class TestReports:

    def test_score_insights_report_dashboard(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id)
            await _invoice(client, business_id, customer_id)
            await _filing(client, business_id)

            score = (await client.get(f"{BASE}/businesses/{business_id}/compliance-score")).json()["data"]
            assert score["overdue_count"] == 1
            assert score["score"] == 85

            insights = (await client.get(f"{BASE}/businesses/{business_id}/insights")).json()["data"]
            assert insights[-1]["type"] == "growth"

            report = (await client.get(
                f"{BASE}/businesses/{business_id}/reports/monthly/042024"
            )).json()["data"]
            assert report["summary"]["invoice_count"] == 1
            assert report["tax_summary"]["net_payable"] == 360.0

            dashboard = (await client.get(f"{BASE}/businesses/{business_id}/dashboard")).json()["data"]
            assert dashboard["total_invoices"] == 1
            assert dashboard["total_customers"] == 1
            assert len(dashboard["upcoming_deadlines"]) == 1

            reminders = await client.post(f"{BASE}/businesses/{business_id}/reminders")
            assert reminders.json()["message"] == "Generated 0 reminder(s)"

        api(scenario)


class TestTools:

    def test_late_fee_endpoint_caps_fee(self, api):
        async def scenario(client):
            resp = await client.get(f"{BASE}/late-fee/GSTR-3B/2024-04-20", params={"tax_amount": 10000})
            data = resp.json()["data"]
            assert data["days_late"] > 0
            assert data["late_fee"] == 5000.0
            assert data["interest"] > 0

        api(scenario)

    def test_late_fee_rejects_non_finite_tax_amount(self, api):
        async def scenario(client):
            for amount in ("inf", "nan"):
                resp = await client.get(f"{BASE}/late-fee/GSTR-3B/2024-04-20", params={"tax_amount": amount})
                assert resp.status_code == 422, amount

        api(scenario)

    def test_calculator_preview(self, api):
        async def scenario(client):
            resp = await client.post(
                f"{BASE}/calculator/line-items",
                json={"own_state_code": "27", "place_of_supply_code": "29", "items": [LINE]},
            )
            data = resp.json()["data"]
            assert data["tax_treatment"] == "inter_state"
            assert data["total_igst"] == 360.0
            assert data["total_amount"] == 2360.0

        api(scenario)

    def test_reference_tables(self, api):
        async def scenario(client):
            states = (await client.get(f"{BASE}/reference/states")).json()["data"]
            assert {"code": "27", "name": "Maharashtra"} in states

            hsn = (await client.get(f"{BASE}/reference/hsn", params={"q": "8471"})).json()["data"]
            assert hsn == [{"code": "8471", "description": "Computers and peripheral equipment", "gst_rate": 18}]

            rates = (await client.get(f"{BASE}/reference/gst-rates")).json()["data"]
            assert rates == [0, 5, 12, 18, 28]

        api(scenario)

    def test_health(self, api):
        async def scenario(client):
            resp = await client.get(f"{BASE}/health")
            assert resp.status_code == 200
            assert resp.json()["message"] == "running"

        api(scenario)


class TestInvoicePdf:

    def test_pdf_download(self, api):
        async def scenario(client):
            business_id = await _business(client)
            customer_id = await _customer(client, business_id, state_code="29", name="Buyer & Sons")
            invoice_id = (await _invoice(client, business_id, customer_id)).json()["data"]["id"]

            resp = await client.get(f"{BASE}/businesses/{business_id}/invoices/{invoice_id}/pdf")
            assert resp.status_code == 200
            assert resp.headers["content-type"] == "application/pdf"
            assert 'filename="INV-0001.pdf"' in resp.headers["content-disposition"]
            assert resp.content.startswith(b"%PDF")

            missing = await client.get(f"{BASE}/businesses/{business_id}/invoices/{uuid.uuid4()}/pdf")
            assert missing.status_code == 404

        api(scenario)
