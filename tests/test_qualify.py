from lead_finder.qualify import check_lead, qualification_report, qualify_leads


def test_complete_lead_qualifies(make_lead) -> None:
    checks = check_lead(make_lead())
    assert checks.passed
    assert checks.failed() == []


def test_each_check_can_fail(make_lead) -> None:
    assert check_lead(make_lead(email_verified=False)).failed() == ["email"]
    assert check_lead(make_lead(email="not-an-email")).failed() == ["email"]
    assert check_lead(make_lead(profile_url="https://linkedin.com/company/acme")).failed() == ["linkedin"]
    assert check_lead(make_lead(employee_count="N/A")).failed() == ["company"]
    assert check_lead(make_lead(location="Location not available")).failed() == ["location"]
    assert check_lead(make_lead(work_history=[])).failed() == ["work_history"]
    assert check_lead(make_lead(job_title="")).failed() == ["basic_info"]


def test_qualify_leads_keeps_order(make_lead) -> None:
    leads = [make_lead("a"), make_lead("b", email=None), make_lead("c")]

    assert [lead.id for lead in qualify_leads(leads)] == ["a", "c"]
    assert not qualification_report(leads)["b"].passed
