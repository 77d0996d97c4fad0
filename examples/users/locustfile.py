import random
import string
from threading import Lock
from locust import HttpUser, task, tag, between


_ids_lock = Lock()
_ids = []


def _rand_id() -> str:
    return "".join(random.choice(string.ascii_lowercase + string.digits) for _ in range(8))


def _rand_name() -> str:
    return "user-" + "".join(random.choice(string.ascii_lowercase) for _ in range(6))


class UsersClient(HttpUser):
    wait_time = between(0.05, 0.15)

    @tag("read")
    @task(2)
    def greetings(self):
        self.client.get("/", name="GET /")
        self.client.get("/greet", params={"name": _rand_name()}, name="GET /greet")
        self.client.get(f"/greet/{_rand_name()}", name="GET /greet/:name")

    @tag("read")
    @task(5)
    def list_users(self):
        self.client.get("/users", name="GET /users")
        self.client.get("/sharedstate", name="GET /sharedstate")

    @tag("write")
    @task(3)
    def create_and_get(self):
        uid = _rand_id()
        r = self.client.post("/create-user", json={"id": uid, "username": _rand_name()}, name="POST /create-user")
        if r.status_code == 200:
            with _ids_lock:
                _ids.append(uid)
            self.client.get(f"/getuser/{uid}", name="GET /getuser/:id")

    @tag("write")
    @task(1)
    def update_or_delete(self):
        with _ids_lock:
            uid = random.choice(_ids) if _ids else None
        if uid is None:
            return
        if random.random() < 0.5:
            with self.client.put(
                f"/update-user/{uid}",
                json={"id": uid, "username": _rand_name()},
                name="PUT /update-user/:id",
                catch_response=True,
            ) as r:
                # another locust user may have deleted it already
                if r.status_code == 404:
                    r.success()
        else:
            with self.client.delete(f"/delete-user/{uid}", name="DELETE /delete-user/:id", catch_response=True) as r:
                if r.status_code in (200, 404):
                    r.success()
                    with _ids_lock:
                        try:
                            _ids.remove(uid)
                        except ValueError:
                            pass

    @tag("read")
    @task(1)
    def echo(self):
        self.client.post("/echo", json={"message": _rand_name()}, name="POST /echo")
