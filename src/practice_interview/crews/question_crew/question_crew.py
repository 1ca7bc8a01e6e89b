# src/practice_interview/crews/question_crew/question_crew.py
from crewai import Agent, Crew, LLM, Process, Task
from crewai.project import CrewBase, agent, crew, task
from crewai.agents.agent_builder.base_agent import BaseAgent
from typing import List

from pydantic import BaseModel

from practice_interview.config import LLM_CONFIG


class InterviewQuestions(BaseModel):
    questions: List[str]

@CrewBase
class QuestionCrew():
    """Crew for preparing the questions of a mock interview"""

    agents_config: str = 'config/agents.yaml'
    tasks_config: str = 'config/tasks.yaml'

    agents: List[BaseAgent]
    tasks: List[Task]

    @agent
    def question_writer(self) -> Agent:
        return Agent(
            config=self.agents_config['question_writer'], # type: ignore[index]
            llm=LLM(model=LLM_CONFIG["model"]),
            verbose=True
        )

    @task
    def prepare_interview_questions(self) -> Task:
        return Task(
            config=self.tasks_config['prepare_interview_questions'], # type: ignore[index]
            output_pydantic=InterviewQuestions
        )

    @crew
    def crew(self) -> Crew:
        """Creates the question preparation crew"""

        return Crew(
            agents=self.agents,
            tasks=self.tasks,
            process=Process.sequential,
            verbose=True,
        )
