import medregistry
from medregistry import NotAHospital, Role, Unauthorized

OWNER = "0x" + "0a" * 20
PATIENT = "0x" + "1b" * 20
HOSPITAL = "0x" + "2c" * 20


def main() -> None:
    server = medregistry.run(owner=OWNER, new_server=True)
    print(f"Registry {server.address} running at {server.url} (owner {server.owner})")

    patient = server.client(PATIENT)
    patient.register_user("Ana", "Gomez", "CL", "ana@x.com", Role.PATIENT)
    print("patient role:", patient.get_role(PATIENT).value)

    hospital = server.client(HOSPITAL)
    hospital.register_hospital("Clinica Sur", "LIC-99", "Av. Siempre Viva 123")

    owner = server.client(OWNER)
    owner.verify_hospital(HOSPITAL, True)
    print("hospital verified:", owner.get_hospital_details(HOSPITAL).verified)

    try:
        patient.verify_hospital(HOSPITAL, False)
    except Unauthorized as e:
        print("patient cannot verify:", e)

    try:
        owner.verify_hospital(PATIENT, True)
    except NotAHospital as e:
        print("not a hospital:", e)

    for event in owner.events():
        print(event)


if __name__ == "__main__":
    main()
