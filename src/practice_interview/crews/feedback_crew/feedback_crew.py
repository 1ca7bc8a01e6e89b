# src/practice_interview/crews/feedback_crew/feedback_crew.py
from crewai import Agent, Crew, LLM, Process, Task
from crewai.project import CrewBase, agent, crew, task
from crewai.agents.agent_builder.base_agent import BaseAgent
from typing import List

from pydantic import BaseModel, Field

from practice_interview.config import LLM_CONFIG


class CategoryScore(BaseModel):
    name: str
    score: int = Field(ge=0, le=100)
    comment: str


class FeedbackAssessment(BaseModel):
    total_score: int = Field(ge=0, le=100)
    category_scores: List[CategoryScore]
    strengths: List[str]
    areas_for_improvement: List[str]
    final_assessment: str


@CrewBase
class FeedbackCrew():
    """Crew for grading a finished mock interview"""

    agents_config: str = 'config/agents.yaml'
    tasks_config: str = 'config/tasks.yaml'

    agents: List[BaseAgent]
    tasks: List[Task]

    @agent
    def interview_assessor(self) -> Agent:
        return Agent(
            config=self.agents_config['interview_assessor'], # type: ignore[index]
            llm=LLM(model=LLM_CONFIG["model"]),
            verbose=True
        )

    @task
    def assess_interview(self) -> Task:
        return Task(
            config=self.tasks_config['assess_interview'], # type: ignore[index]
            output_pydantic=FeedbackAssessment
        )

    @crew
    def crew(self) -> Crew:
        """Creates the feedback crew"""
        return Crew(
            agents=self.agents,
            tasks=self.tasks,
            process=Process.sequential,
            verbose=True,
        )
