from pydantic import BaseModel, Field

from slotwise.models.room import Room, RoomType


class RoomBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: RoomType
    capacity: int = Field(ge=1, le=1000)

    def to_model(self, room_id: str) -> Room:
        return Room(id=room_id, name=self.name, type=self.type, capacity=self.capacity)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(RoomBase):
    pass


class RoomOut(RoomBase):
    id: str

    model_config = {"from_attributes": True}
