"""Small in-memory documents shared by the test modules."""

DOCUMENT = {
    "Worlds": [
        {
            "name": "DC",
            "series": [
                {
                    "id": "s1",
                    "name": "Batman Series",
                    "characters": [
                        {
                            "id": "bruce",
                            "name": "Bruce Wayne",
                            "alias": ["Batman", "The Dark Knight"],
                            "rating": "9.5",
                            "logo": "assets/images/logos/batman_logo.jpeg",
                            "abilities": [
                                {
                                    "name": "Detective Skills",
                                    "type": "skill",
                                    "short_description": "World's greatest detective",
                                }
                            ],
                            "gallery": ["bruce_1.jpeg", "bruce_2.jpeg"],
                        },
                        {"id": "alfred", "name": "Alfred Pennyworth", "rating": "8.1"},
                        {"id": "selina", "name": "Selina Kyle", "alias": ["Catwoman"], "rating": "8.8"},
                    ],
                },
                {
                    "id": "s2",
                    "name": "Justice League Series",
                    "characters": [
                        {"reference": True, "character_id": "bruce"},
                        {"id": "diana", "name": "Diana Prince", "alias": ["Wonder Woman"], "rating": "9.2"},
                        {"reference": True, "character_id": "ghost"},
                    ],
                },
                {
                    "id": "s3",
                    "name": "Superman Series",
                    "characters": [
                        {"id": "clark", "name": "Clark Kent", "alias": ["Superman"], "rating": 9.4},
                    ],
                },
            ],
        },
        {
            "name": "Marvel",
            "series": [
                {
                    "id": "m1",
                    "name": "Avengers Series",
                    "characters": [
                        {
                            "id": "tony",
                            "name": "Tony Stark",
                            "alias": ["Iron Man"],
                            "title": ["Genius"],
                            "rating": "9.0",
                            "abilities": [
                                {"name": "Repulsor Blast", "type": "tech", "short_description": "Energy blasts"}
                            ],
                        },
                        {
                            "id": "johnny",
                            "name": "Johnny Storm",
                            "alias": ["Human Torch"],
                            "rating": "8.6",
                            "abilities": [
                                {
                                    "name": "Flame On",
                                    "type": "power",
                                    "short_description": "Engulfs his body in FIRE",
                                    "full_description": "Can fly while aflame.",
                                }
                            ],
                        },
                    ],
                },
                {
                    "id": "m2",
                    "name": "Fantastic Four Series",
                    "characters": [
                        {"reference": True, "character_id": "johnny"},
                        {"id": "reed", "name": "Reed Richards", "title": ["Mister Fantastic"], "rating": "8.4"},
                    ],
                },
            ],
        },
        {
            "name": "Anime",
            "series": [
                {
                    "id": "a1",
                    "name": "One Piece Series",
                    "characters": [
                        {"id": "luffy", "name": "Monkey D. Luffy", "rating": "9.8"},
                        {"id": "ace", "name": "Portgas D. Ace", "alias": ["Fire Fist"], "rating": "9.1"},
                    ],
                },
                {
                    "id": "a2",
                    "name": "Naruto Series",
                    "characters": [
                        {"id": "naruto", "name": "Naruto Uzumaki"},
                    ],
                },
            ],
        },
    ]
}


def _video(cid, yid):
    return {"character_id": cid, "youtube_id": yid, "title": f"{cid} {yid}", "duration": "10:00", "views": "1M"}


VIDEOS = {
    "videos": [
        _video("tony", "t1"),
        _video("tony", "t2"),
        _video("tony", "t1"),
        _video("tony", "t3"),
        _video("tony", "t4"),
        _video("bruce", "b1"),
        _video("bruce", "b2"),
        _video("selina", "s1"),
        _video("selina", "s2"),
        _video("luffy", "l1"),
    ]
}
