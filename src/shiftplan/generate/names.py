FIRST_NAMES: tuple[str, ...] = (
    "Adriana", "Alberto", "Alejandra", "Alonso", "Ana", "Andrea", "Angela",
    "Antonio", "Beatriz", "Bruno", "Camila", "Carlos", "Carmen", "Cesar",
    "Claudia", "Cristian", "Daniela", "Diego", "Elena", "Emilio", "Fabiola",
    "Felipe", "Fernanda", "Gabriel", "Gloria", "Gonzalo", "Hector", "Ines",
    "Isabel", "Ivan", "Jaime", "Javier", "Jimena", "Jorge", "Jose", "Juan",
    "Julia", "Karen", "Laura", "Leonardo", "Lucia", "Luis", "Manuel",
    "Marco", "Maria", "Mariana", "Martin", "Mateo", "Natalia", "Nicolas",
    "Noelia", "Oscar", "Pablo", "Patricia", "Paula", "Pedro", "Raul",
    "Renato", "Ricardo", "Rocio", "Rodrigo", "Rosa", "Santiago", "Sara",
    "Sebastian", "Sergio", "Silvia", "Sofia", "Tomas", "Valeria", "Victor",
    "Ximena", "Yolanda", "Zoe",
)
