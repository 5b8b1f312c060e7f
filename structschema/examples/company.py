"""Company schema mixing inline shapes with a shared definition.

`PersonSchema` and `AddressSchema` are copied into each field that uses them,
while `department` is registered once under `$defs` and referenced.
"""

from __future__ import annotations

from structschema import Schema, template_of


class PersonSchema(Schema):
    def declare(self) -> None:
        self.string("name", "Person's full name")
        self.integer("age", "Person's age")


class AddressSchema(Schema):
    def declare(self) -> None:
        self.string("street", "Street address")
        self.string("city", "City name")
        self.string("zipcode", "Postal code")


class CompanySchema(Schema):
    description = "A company with its people and offices"

    def declare(self) -> None:
        self.string("name", "Company name")
        self.array("employees", of=PersonSchema, description="Company employees")
        self.object("founder", of=PersonSchema, description="Company founder")
        self.object("headquarters", of=template_of(AddressSchema), description="Main office")
        self.object("ceo", lambda body: body.inline(PersonSchema))

        def department(body):
            body.string("name")
            body.integer("employee_count")

        self.define("department", department)
        self.array("departments", of="department", description="Company departments")


def company_schema() -> CompanySchema:
    return CompanySchema("CompanyExample")


class CyclicSchema(Schema):
    """Two definitions that reference each other; never valid."""

    def declare(self) -> None:
        self.define("user", lambda body: body.object("profile", of="profile"))
        self.define("profile", lambda body: body.object("owner", of="user"))
        self.object("account", of="user")
