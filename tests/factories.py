import factory
from factory.alchemy import SQLAlchemyModelFactory

from db.models import GlenairArrangement, GlenairContact, GlenairWireContact


class ContactFactory(SQLAlchemyModelFactory):
    """Factory for creating GlenairContact rows."""

    class Meta:
        model = GlenairContact
        sqlalchemy_session_persistence = "commit"

    part_number = factory.Sequence(lambda n: f"10-{375 + n}-20")
    type = "Pin"
    contact_size = "20"
    awg_range = "26÷20"
    mm2_range = "0.13÷0.52"
    description = factory.Faker("sentence", nb_words=4)


class ArrangementFactory(SQLAlchemyModelFactory):
    """Factory for creating GlenairArrangement rows (one size per row)."""

    class Meta:
        model = GlenairArrangement
        sqlalchemy_session_persistence = "commit"

    arrangement = factory.Sequence(lambda n: f"{10 + n}S-{n}")
    total_contacts = 4
    contact_size = "20"
    contact_count = factory.SelfAttribute("total_contacts")


class WireContactFactory(SQLAlchemyModelFactory):
    """Factory for creating GlenairWireContact rows."""

    class Meta:
        model = GlenairWireContact
        sqlalchemy_session_persistence = "commit"

    wire_size = "20"
    system = "AWG"
    contact_size = "20"


ALL = (ContactFactory, ArrangementFactory, WireContactFactory)
