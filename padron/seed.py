"""
Demo data loaded at start-up: admin accounts, two registry records per
state, the partner institutions and a few past validations so the
history and stats endpoints have something to show.

Fingerprint templates are placeholders ("FP_<STATE>_<N>"). Sending the
same string to /api/biometria/validar produces a successful match.
"""

import logging

from padron.models.schemas import RegistryRecordCreate
from padron.security import hash_password
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

ADMIN_USERS = [
    ("admin", "Administrador Principal"),
    ("admin1", "Administrador 1"),
    ("admin2", "Administrador 2"),
    ("admin3", "Administrador 3"),
    ("admin4", "Administrador 4"),
]

# (curp, full name, INE number, RFC, state, fingerprint template)
SAMPLE_RECORDS = [
    ("AUTR901015HASGRF01", "RAFAEL AGUILAR TORRES", "0101234567890", "AUTR901015A12", "Aguascalientes", "FP_AGS_001"),
    ("HERJ850722MASRDL08", "JULIA HERNÁNDEZ RODRÍGUEZ", "0101234567891", "HERJ850722M34", "Aguascalientes", "FP_AGS_002"),
    ("LOSM920715HBCPNR08", "MARIO LÓPEZ SÁNCHEZ", "0201234567890", "LOSM920715H87", "Baja California", "FP_BC_001"),
    ("GARC880523MBCRVR05", "CARLA GARCÍA RIVERA", "0201234567891", "GARC880523M76", "Baja California", "FP_BC_002"),
    ("MARR950612HBSRZC03", "RICARDO MARTÍNEZ RUIZ", "0301234567890", "MARR950612H54", "Baja California Sur", "FP_BCS_001"),
    ("GONS901208MBSNXN02", "SANDRA GONZÁLEZ NÚÑEZ", "0301234567891", "GONS901208M43", "Baja California Sur", "FP_BCS_002"),
    ("PERF850315HCCRZR04", "FERNANDO PÉREZ RUIZ", "0401234567890", "PERF850315H21", "Campeche", "FP_CAM_001"),
    ("RODM920715MCCDPR08", "MARTHA RODRÍGUEZ LÓPEZ", "0401234567891", "RODM920715M87", "Campeche", "FP_CAM_002"),
    ("HERD950612HCLRMG03", "DIEGO HERRERA RAMOS", "0501234567890", "HERR950612H54", "Coahuila", "FP_COA_001"),
    ("LUEE901208MCLNSS02", "ESPERANZA LUNA ESCOBAR", "0501234567891", "LUNE901208M43", "Coahuila", "FP_COA_002"),
    ("MEDN850315HCMNZR04", "NORBERTO MÉNDEZ DÍAZ", "0601234567890", "MEND850315H21", "Colima", "FP_COL_001"),
    ("CAST920715MCMSNR08", "TERESA CASTILLO SANTOS", "0601234567891", "CAST920715M87", "Colima", "FP_COL_002"),
    ("VAZJ880523HCSZRS05", "JOSÉ VÁZQUEZ ZARATE", "0701234567890", "VAZJ880523H76", "Chiapas", "FP_CHP_001"),
    ("CUZR950612MCSRPS03", "ROSA CRUZ ZAPATA", "0701234567891", "CRUZ950612M54", "Chiapas", "FP_CHP_002"),
    ("SAHA901208HCHNRN02", "ANTONIO SANTOS HERNÁNDEZ", "0801234567890", "SANT901208H43", "Chihuahua", "FP_CHH_001"),
    ("VAHG850315MCHRRL04", "GLORIA VARGAS HERRERA", "0801234567891", "VARG850315M21", "Chihuahua", "FP_CHH_002"),
    ("JIMR920715HDFMRD08", "RODRIGO JIMÉNEZ MORALES", "0901234567890", "JIMR920715H87", "Ciudad de México", "FP_CDMX_001"),
    ("MORA880523MDFRVL05", "ALEJANDRA MORALES RIVERA", "0901234567891", "MORA880523M76", "Ciudad de México", "FP_CDMX_002"),
    ("GAGJ880523HDGRRV05", "JAVIER GARCÍA GUERRERO", "1001234567890", "GARJ880523H76", "Durango", "FP_DUR_001"),
    ("RAGI950612MDGMMR03", "IRMA RAMÍREZ GÓMEZ", "1001234567891", "RAMI950612M54", "Durango", "FP_DUR_002"),
    ("OIHL901208HGTRRS02", "LUIS ORTIZ HERRERA", "1101234567890", "ORTL901208H43", "Guanajuato", "FP_GTO_001"),
    ("FOOW850315MGTLRN04", "WENDY FLORES ORTIZ", "1101234567891", "FLOW850315M21", "Guanajuato", "FP_GTO_002"),
    ("DELR920715HGRLNB08", "RUBÉN DELGADO LEÓN", "1201234567890", "DELR920715H87", "Guerrero", "FP_GRO_001"),
    ("AUIL880523MGRGBR05", "LORENA AGUILAR IBARRA", "1201234567891", "AGUI880523M76", "Guerrero", "FP_GRO_002"),
    ("SOGM950612HHGLLG03", "MIGUEL SOLIS GALVÁN", "1301234567890", "SOLM950612H54", "Hidalgo", "FP_HGO_001"),
    ("BATR901208MHGTRT02", "RUTH BAUTISTA TORRES", "1301234567891", "BAUT901208M43", "Hidalgo", "FP_HGO_002"),
    ("CERR850315HJCRZF04", "RAFAEL CERVANTES RUIZ", "1401234567890", "CERR850315H21", "Jalisco", "FP_JAL_001"),
    ("NULP920715MJCXPT08", "PATRICIA NÚÑEZ LÓPEZ", "1401234567891", "NULP920715M87", "Jalisco", "FP_JAL_002"),
    ("RIVS880523HMCVGR05", "SERGIO RIVERA VEGA", "1501234567890", "RIVS880523H76", "México", "FP_MEX_001"),
    ("TORV950612MMCRYV03", "VIVIANA TORRES REYES", "1501234567891", "TORV950612M54", "México", "FP_MEX_002"),
    ("GUZD901208HMNZVV02", "DAVID GUZMÁN ZAVALA", "1601234567890", "GUZD901208H43", "Michoacán", "FP_MICH_001"),
    ("SALX850315MMNLPM04", "XIMENA SALAZAR LÓPEZ", "1601234567891", "SALX850315M21", "Michoacán", "FP_MICH_002"),
    ("CABF920715HMSBRR08", "FERNANDO CABRERA BRAVO", "1701234567890", "CABF920715H87", "Morelos", "FP_MOR_001"),
    ("GAHY880523MMSRRR05", "YURIDIA GARCÍA HERRERA", "1701234567891", "GARY880523M76", "Morelos", "FP_MOR_002"),
    ("MONJ950612HNTNVR03", "JORGE MONTOYA NAVARRO", "1801234567890", "MONJ950612H54", "Nayarit", "FP_NAY_001"),
    ("IABZ901208MNTBRR02", "ZAIRA IBARRA BRIONES", "1801234567891", "IBAZ901208M43", "Nayarit", "FP_NAY_002"),
]

SAMPLE_INSTITUTIONS = [
    ("BANCO_AZTECA", "azteca_key_123"),
    ("BBVA_MEXICO", "bbva_key_456"),
    ("SANTANDER_MX", "santander_key_789"),
]

# (institution, curp, matching percentage, status, ip)
SAMPLE_HISTORY = [
    ("BANCO_AZTECA", "LOSM920715HBCPNR08", 94, "success", "192.168.1.101"),
    ("BBVA_MEXICO", "MORA880523MDFRVL05", 87, "success", "10.0.2.45"),
    ("SANTANDER_MX", "GAHY880523MMSRRR05", 42, "failed", "172.16.0.23"),
]


def seed_demo_data(store: RegistryStore, admin_password: str) -> None:
    # One hash shared by every admin account; hashing is the slow part.
    password_hash = hash_password(admin_password)
    for username, display_name in ADMIN_USERS:
        store.create_user(username, password_hash, display_name=display_name)

    for curp, full_name, ine_number, rfc, state, fingerprint in SAMPLE_RECORDS:
        store.create_record(RegistryRecordCreate(
            curp=curp,
            full_name=full_name,
            ine_number=ine_number,
            rfc=rfc,
            state=state,
            fingerprint_data=fingerprint,
        ))

    for name, api_key in SAMPLE_INSTITUTIONS:
        store.create_institution(name, api_key)

    for institution, curp, percentage, status, ip in SAMPLE_HISTORY:
        store.add_validation(institution, curp, percentage, status, ip)

    logger.info(
        "Seeded %d users, %d registry records, %d institutions, %d history entries",
        len(store.users), len(store.records), len(store.institutions), len(store.history),
    )
