from fastapi import status


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Welcome to Movie Rental API"}


def test_stats_empty(test_client):
    response = test_client.get("/api/stats")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"activeRentals": 0, "availableMovies": 0, "registeredUsers": 0}


def test_stats_track_rentals(test_client, make_user, make_movie, rent_movie):
    user = make_user()
    movie = make_movie()
    make_movie(title="Spare")
    rental = rent_movie(user["id"], movie["id"]).json()

    assert test_client.get("/api/stats").json() == {
        "activeRentals": 1,
        "availableMovies": 1,
        "registeredUsers": 1
    }

    test_client.patch(f"/api/rentals/{rental['id']}/return", json={})

    assert test_client.get("/api/stats").json()["activeRentals"] == 0
    assert test_client.get("/api/stats").json()["availableMovies"] == 2


def test_seeded_sample_data(seeded_client):
    stats = seeded_client.get("/api/stats").json()
    assert stats == {"activeRentals": 3, "availableMovies": 4, "registeredUsers": 4}

    rentals = seeded_client.get("/api/rentals").json()
    assert [r["status"] for r in rentals] == ["active", "due_today", "overdue"]
    assert [r["movie"]["title"] for r in rentals] == ["Inception", "The Matrix", "The Shawshank Redemption"]

    movies = seeded_client.get("/api/movies").json()
    assert len(movies) == 7
    assert [m["available"] for m in movies[:3]] == [False, False, False]
