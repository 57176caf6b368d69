import pytest

from energix import VehicleRecord


def make_record(**overrides):
    """Backend-shaped record for a truck, with overridable fields."""
    record = {
        'id': 'r1',
        'type': 'camions',
        'matricule': '123 TU 4567',
        'mois': 'Janvier',
        'year': '2024',
        'region': 'Nord',
        'consommationL': 100.0,
        'consommationTEP': 0.086,
        'coutDT': 200.0,
        'kilometrage': 1000.0,
        'produitsTonnes': 10.0,
        'ipeL100km': 10.0,
        'ipeL100TonneKm': 1.0,
        'rawValues': {},
    }
    record.update(overrides)
    return record


@pytest.fixture
def truck_records():
    """Two trucks over three months, given out of calendar order."""
    return [
        make_record(id='1', matricule='A', mois='Mars', consommationL=120.0, kilometrage=1100.0,
                    produitsTonnes=12.0, coutDT=240.0, ipeL100km=10.9, ipeL100TonneKm=0.9),
        make_record(id='2', matricule='A', mois='Janvier', consommationL=100.0, kilometrage=1000.0,
                    produitsTonnes=10.0, coutDT=200.0, ipeL100km=10.0, ipeL100TonneKm=1.0),
        make_record(id='3', matricule='B', mois='Janvier', consommationL=80.0, kilometrage=500.0,
                    produitsTonnes=4.0, coutDT=160.0, ipeL100km=16.0, ipeL100TonneKm=4.0),
        make_record(id='4', matricule='B', mois='Février', consommationL=90.0, kilometrage=600.0,
                    produitsTonnes=5.0, coutDT=180.0, ipeL100km=15.0, ipeL100TonneKm=3.0),
    ]


@pytest.fixture
def truck_models(truck_records):
    return [VehicleRecord(**record) for record in truck_records]
