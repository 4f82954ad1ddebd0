from __future__ import annotations

from conftest import make_job
from jobhub.cards import html_block, meta_line


def test_provider_text_is_escaped():
    job = make_job(
        "x",
        location="<b>台北</b>",
        mentor_analysis='<img src=x onerror="alert(1)">',
        company_reviews="R&D 文化 > 薪資",
    )

    assert html_block("job-meta", meta_line(job)) == '<div class="job-meta">&lt;b&gt;台北&lt;/b&gt;</div>'
    assert "<img" not in html_block("mentor-box", job.mentor_analysis)
    assert html_block("review-box", job.company_reviews) == '<div class="review-box">R&amp;D 文化 &gt; 薪資</div>'


def test_span_tag():
    assert html_block("job-source", "104") == '<div class="job-source">104</div>'
    assert html_block("job-source", "104", tag="span") == '<span class="job-source">104</span>'


def test_meta_line_skips_empty_fields():
    job = make_job("x", location="台中市", salary="", experience="1-3 年", posted_at="2 天前")
    assert meta_line(job) == "台中市 · 1-3 年 · 刊登：2 天前"
    assert meta_line(make_job("y", location="")) == ""
