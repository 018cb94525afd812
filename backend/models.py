from sqlalchemy import Column, String, Integer, ForeignKey, Table, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base


class EntityBase(Base):
    """
    Shared columns for every record managed through the generic services.

    Subclasses get an autoincrement integer primary key and a required name.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)


employee_skills = Table(
    'employee_skills',
    Base.metadata,
    Column('employee_id', Integer, ForeignKey('employees.id', ondelete='CASCADE'), primary_key=True),
    Column('skill_id', Integer, ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True),
)


class Department(EntityBase):
    __tablename__ = 'departments'

    code = Column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint('code', name='uq_department_code'),
    )


class Skill(EntityBase):
    __tablename__ = 'skills'

    level = Column(Integer, default=1)  # 1 (basic) .. 5 (expert)


class Employee(EntityBase):
    """
    Staff member.

    Relations:
    - department: many-to-one, carried as a single id on the transfer object
    - skills: many-to-many, carried as a list of ids on the transfer object
    """
    __tablename__ = 'employees'

    email = Column(String, nullable=True)
    age = Column(Integer, nullable=True)
    department_id = Column(Integer, ForeignKey('departments.id'), nullable=True)

    department = relationship(Department)
    skills = relationship(Skill, secondary=employee_skills, order_by=Skill.id)

    __table_args__ = (
        CheckConstraint("name != ''"),
        UniqueConstraint('email', name='uq_employee_email'),
    )
