# Catálogo do curso (Scienze Motorie). Usado pelo formulário de exames:
# quem escolhe um course_id recebe nome e CFU prontos.
ALL_COURSES = [
    # ANNO 1
    {"id": "teorie_motoria", "name": "Teorie, metodologie e didattiche dell'educazione motoria", "cfu": 9, "year": 1},
    {"id": "anatomia", "name": "Anatomia umana", "cfu": 9, "year": 1},
    {"id": "fisiologia", "name": "Fisiologia applicata allo sport", "cfu": 9, "year": 1},
    {"id": "metod_val", "name": "Metodologia della valutazione motoria", "cfu": 6, "year": 1},
    {"id": "igiene", "name": "Igiene e valutazione dei bisogni di salute", "cfu": 9, "year": 1},
    {"id": "metodi_sq", "name": "Metodi e didattiche degli sport individuali e di squadra", "cfu": 6, "year": 1},
    {"id": "statistica", "name": "Statistica", "cfu": 6, "year": 1},
    {"id": "info", "name": "Idoneità informatica", "cfu": 3, "year": 1},
    {"id": "inglese", "name": "Idoneità di lingua inglese", "cfu": 3, "year": 1},

    # ANNO 2
    {"id": "ampc1", "name": "Attività motoria Preventiva e Compensativa 1", "cfu": 8, "year": 2},
    {"id": "tec_sport1", "name": "Tecnologie dello sport e fitness 1", "cfu": 9, "year": 2},
    {"id": "org_aziendale", "name": "Organizzazione Aziendale", "cfu": 6, "year": 2},
    {"id": "teorie_all", "name": "Teorie e metodologie dell'allenamento", "cfu": 9, "year": 2},
    {"id": "ampc2", "name": "Attività motoria Preventiva e Compensativa 2", "cfu": 8, "year": 2},
    {"id": "chinesio", "name": "Chinesiologia di base e riabilitazione posturale", "cfu": 6, "year": 2},
    {"id": "scelta_2", "name": "Insegnamento a scelta (Anno 2)", "cfu": 6, "year": 2},
    {"id": "tirocinio_2", "name": "Tirocini formativi e di orientamento - II anno", "cfu": 5, "year": 2},

    # ANNO 3
    {"id": "psico_gen", "name": "Psicologia generale", "cfu": 6, "year": 3},
    {"id": "tec_sport2", "name": "Tecnologie dello sport e fitness 2", "cfu": 9, "year": 3},
    {"id": "ped_gioco", "name": "Pedagogia del gioco e dello sport", "cfu": 6, "year": 3},
    {"id": "psico_din", "name": "Psicologia dinamica", "cfu": 9, "year": 3},
    {"id": "nutriz", "name": "Nutrizione clinica e dietetica applicata allo sport", "cfu": 9, "year": 3},
    {"id": "met_ricerca", "name": "Metodologie per la ricerca applicate alle scienze motorie-sportive", "cfu": 9, "year": 3},
    {"id": "scelta_3", "name": "Insegnamento a scelta (Anno 3)", "cfu": 6, "year": 3},
    {"id": "tirocinio_3", "name": "Tirocini formativi e di orientamento - III anno", "cfu": 6, "year": 3},
    {"id": "tesi", "name": "Prova finale", "cfu": 3, "year": 3},
]

COURSES_BY_ID = {c["id"]: c for c in ALL_COURSES}

def find_course(course_id):
    return COURSES_BY_ID.get(course_id)

def courses_by_year():
    grouped = {}
    for course in ALL_COURSES:
        grouped.setdefault(course["year"], []).append(course)
    return grouped
