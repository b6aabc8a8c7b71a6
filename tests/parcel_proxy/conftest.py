"""
Shared fixtures for parcel proxy tests: trimmed copies of the upstream pages.
"""
import pytest

TRUSTEE_OWNER_BLOCK = """
<table id="ownerFormView">
  <tr><td>
    <table>
      <tr><td><strong>Owner Name:</strong></td><td>SMITH JOHN &amp; MARY</td></tr>
      <tr><td>Property Location:</td><td>123  MAIN ST</td></tr>
      <tr><td>Mailing Address:</td><td>PO BOX 1 MEMPHIS TN 38103</td></tr>
      <tr><td>Parcel ID#:</td><td>06300200000250</td></tr>
    </table>
  </td></tr>
</table>
"""

TRUSTEE_SUMMARY_TEMPLATE = """
<table id="layout"><tr><td>
  <table class="grid">
    <tr{header_attrs}><td>Year</td><td>Assessment</td><td>Total Due</td></tr>
    <tr><td><a href="Drilldown.aspx?ParcelID=06300200000250&amp;Year=2024" onclick="showYear(2024)">2024</a></td><td>$12,000</td><td>$0.00</td></tr>
    <tr><td><a href="Drilldown.aspx?ParcelID=06300200000250&amp;Year=2023">2023</a></td><td>$12,000</td><td>$512.30</td></tr>
  </table>
</td></tr></table>
"""

TRUSTEE_TOTALS = """
<table class="totals">
  <tr><td>Total Tax:</td><td><span id="LabelTaxSum">$1,024.60</span></td></tr>
  <tr><td>Total Due:</td><td><span id="LabelDueSum">$512.30</span></td></tr>
</table>
"""

ASSESSOR_PANELS = {
    "headingOne": """
<div class="card">
  <div class="card-header" id="headingOne">
    <h5 class="card-title">Property Location and Owner Information</h5>
    <button class="btn btn-link" data-toggle="collapse" data-target="#collapseOne">Show</button>
  </div>
  <div id="collapseOne" class="collapse" data-parent="#accordion">
    <div class="card-body">
      <table class="table table-borderless">
        <tr><td>Owner Name</td><td>SMITH JOHN &amp; MARY</td></tr>
        <tr><td>Property Address</td><td>123 MAIN ST</td></tr>
        <tr><td>Municipality</td><td>MEMPHIS</td></tr>
      </table>
      <div class="map-links"><a href="/gis?parcelid=063002%20%2000025">View GIS Map</a></div>
      <div id="gisSection"><iframe src="https://gis.example/map"></iframe></div>
    </div>
  </div>
</div>
""",
    "headingNine": """
<div class="card">
  <div class="card-header" id="headingNine">
    <h5 class="card-title">Appraisal and Assessment Information</h5>
  </div>
  <div id="collapseNine" class="collapse" style="height: 0px;">
    <div class="card-body">
      <table class="table table-borderless">
        <tr><td>Tax Year</td><td>2024</td></tr>
        <tr><td>Total Appraisal</td><td>$48,000</td></tr>
        <tr><td>Total Assessment</td><td>$12,000</td></tr>
      </table>
      <p class="print-link"><a href="/print?parcelid=063002%20%2000025">Print</a></p>
      <p><a href="/InformalReview?parcelid=063002%20%2000025">Request Informal Review</a></p>
    </div>
  </div>
</div>
""",
    "headingThree": """
<div class="card">
  <div class="card-header" id="headingThree">
    <h5 class="card-title">Improvement Details</h5>
  </div>
  <div id="collapseThree" class="collapse">
    <div class="card-body">
      <dl><dt>Year Built</dt><dd>1948</dd><dt>Stories</dt><dd>1</dd></dl>
      <div id="sketchdiv"><canvas id="sketch"></canvas><script>drawSketch();</script></div>
    </div>
  </div>
</div>
""",
    "headingFour": """
<div class="card">
  <div class="card-header" id="headingFour">
    <h5 class="card-title">Other Buildings</h5>
  </div>
  <div id="collapseFour" class="collapse">
    <table class="table"><tr><th>Type</th><th>Year</th></tr><tr><td>Detached Garage</td><td>1960</td></tr></table>
  </div>
</div>
""",
    "headingFive": """
<div class="card">
  <div class="card-header" id="headingFive">
    <h5 class="card-title">Permits</h5>
  </div>
  <div id="collapseFive" class="collapse">
    <table class="table table-borderless">
      <thead><tr><th>Permit</th><th>Date</th><th>Description</th></tr></thead>
      <tbody><tr><td>B1234567</td><td>05/01/2019</td><td>ROOF REPLACEMENT</td></tr></tbody>
    </table>
  </div>
</div>
""",
    "headingSix": """
<div class="card">
  <div class="card-header" id="headingSix">
    <h5 class="card-title">Sales History</h5>
    <button type="button" onclick="toggleSales()">Expand</button>
  </div>
  <div id="collapseSix" class="collapse">
    <table class="table">
      <thead><tr><th>Sale Date</th><th>Price</th><th>Instrument</th></tr></thead>
      <tbody>
        <tr><td>03/18/2014</td><td>$70,000</td><td><a href="https://search.register.shelby.tn.us/search/?instnum=14028941">14028941</a></td></tr>
        <tr><td>02/24/2014</td><td>$0</td><td><a href="javascript:openDoc('14022309')">14022309</a></td></tr>
      </tbody>
    </table>
  </div>
</div>
""",
}

MUNICIPAL_PAGE = """
<html><body><form id="form1">
  <span id="MainBodyPlaceHolder_lblParcelNo">063002  00025</span>
  <span id="MainBodyPlaceHolder_lblOwnerName">SMITH JOHN &amp; MARY</span>
  <span id="MainBodyPlaceHolder_lblOwnerAddress">123 MAIN ST</span>
  <span id="MainBodyPlaceHolder_lblCurrBalance">$0.00</span>
  <table id="MainBodyPlaceHolder_gridDetail">
    <tr><th>Year</th><th>Billed</th><th>Balance</th></tr>
    <tr><td><a href="javascript:ShowHistory('2024')">2024</a></td><td>$410.22</td><td>$0.00</td></tr>
    <tr><td><a href="javascript:ShowHistory('2023')">2023</a></td><td>$398.10</td><td>$0.00</td></tr>
  </table>
</form></body></html>
"""


def _page(*parts: str) -> str:
    return "<html><body>" + "".join(parts) + "</body></html>"


@pytest.fixture
def trustee_html():
    """Trustee inquiry page with owner block, summary and totals."""
    summary = TRUSTEE_SUMMARY_TEMPLATE.format(header_attrs=' class="headerBackground"')
    return _page(TRUSTEE_OWNER_BLOCK, '<div id="PanelMain">', summary, TRUSTEE_TOTALS, "</div>")


@pytest.fixture
def trustee_html_without_header():
    """Trustee page whose summary table lost its ``headerBackground`` row class."""
    summary = TRUSTEE_SUMMARY_TEMPLATE.format(header_attrs="")
    return _page(TRUSTEE_OWNER_BLOCK, '<div id="PanelMain">', summary, TRUSTEE_TOTALS, "</div>")


@pytest.fixture
def build_assessor_html():
    """Factory building an Assessor page from a subset of its panels."""

    def build(header_ids=None):
        ids = list(ASSESSOR_PANELS) if header_ids is None else header_ids
        return _page('<div id="accordion">', *(ASSESSOR_PANELS[i] for i in ids), "</div>")

    return build


@pytest.fixture
def assessor_html(build_assessor_html):
    """Assessor page with all six panels."""
    return build_assessor_html()


@pytest.fixture
def municipal_html():
    """City of Memphis ePayments property page."""
    return MUNICIPAL_PAGE
