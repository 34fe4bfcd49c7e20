from sqlmodel import Field, SQLModel


class PatientBase(SQLModel):
    first_name: str = ""
    last_name: str


class Patient(PatientBase, table=True):
    __tablename__ = "patients"
    id: str = Field(primary_key=True)


class PatientCreate(SQLModel):
    first_name: str = ""
    last_name: str
