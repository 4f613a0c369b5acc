import pytest


PAGE = """<!DOCTYPE html>
<html>
<head><title>Scheda Euro</title></head>
<body>
<div class="contenitore">
  <h3 class="mese" id="mese_0">Marzo 1998</h3>
  <table id="movimenti_1">
    <tr><th></th><th>Data operazione</th><th>Entrate</th><th>Uscite</th><th>Erogante</th><th>Beneficiario</th></tr>
    <tr><td></td><td>03/03/1998</td><td>100.00</td><td></td><td>Banca</td><td>Mario</td></tr>
    <tr><td></td><td colspan="5">Giustizia-Trasferimento</td></tr>
    <tr><td></td><td>05/03/1998</td><td></td><td>50.00</td><td>Mario</td><td>Bottega</td></tr>
    <tr><td></td><td colspan="5">Spese-Acquisto</td></tr>
    <tr><td></td><td>09/03/1998</td><td>20.50</td><td></td><td>Finanza</td><td>Mario</td></tr>
    <tr><td></td><td colspan="5">Rendita passive Finanza-Titoli</td></tr>
  </table>
  <h3 class="mese" id="mese_1">Febbraio 1998</h3>
  <table id="movimenti_2">
    <tr><th></th><th>Data operazione</th><th>Entrate</th><th>Uscite</th><th>Erogante</th><th>Beneficiario</th></tr>
    <tr><td></td><td>10/02/1998</td><td>&nbsp;</td><td>12.25</td><td>Mario</td><td>Polizia</td></tr>
    <tr><td></td><td colspan="5">Polizia-Multa</td></tr>
  </table>
</div>
</body>
</html>
"""


@pytest.fixture
def page():
    return PAGE
